"""Storage of products in a SQL database."""

from __future__ import annotations

import logging
from contextlib import closing
from dataclasses import astuple, dataclass
from typing import Any, Callable, Mapping, TypeVar

from stockroom.database import ER_DUP_ENTRY, ER_NO_REFERENCED_ROW_2, mysql_error_number

logger = logging.getLogger(__name__)

T = TypeVar("T")

_SELECT_COLUMNS = (
    "SELECT id, description, expiration_rate, freezing_rate, height, lenght, netweight, "
    "product_code, recommended_freezing_temperature, width, id_product_type, id_seller "
    "FROM products"
)

SAVE_PRODUCT = (
    "INSERT INTO products(description, expiration_rate, freezing_rate, height, lenght, "
    "netweight, product_code, recommended_freezing_temperature, width, id_product_type, "
    "id_seller) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)"
)
GET_PRODUCT = _SELECT_COLUMNS + " WHERE id = ?;"
GET_ALL_PRODUCTS = _SELECT_COLUMNS + ";"
UPDATE_PRODUCT = (
    "UPDATE products SET description = ?, expiration_rate = ?, freezing_rate = ?, "
    "height = ?, lenght = ?, netweight = ?, product_code = ?, "
    "recommended_freezing_temperature = ?, width = ?, id_product_type = ?, id_seller = ? "
    "WHERE id = ?"
)
DELETE_PRODUCT = "DELETE FROM products WHERE id = ?"
EXISTS_PRODUCT = "SELECT product_code FROM products WHERE product_code = ?;"


@dataclass
class Product:
    """A product as stored in the products table."""

    id: int = 0
    description: str = ""
    expiration_rate: int = 0
    freezing_rate: int = 0
    height: float = 0.0
    length: float = 0.0
    net_weight: float = 0.0
    product_code: str = ""
    recommended_freezing_temperature: float = 0.0
    width: float = 0.0
    product_type_id: int = 0
    seller_id: int | None = None


class RepositoryError(Exception):
    """Base class of the errors raised by the repositories."""

    default_message = "repository error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NotFoundError(RepositoryError):
    default_message = "product not found in database"


class InternalError(RepositoryError):
    default_message = "database internal error"


class ForeignKeyConstraintError(RepositoryError):
    default_message = "a foreign key constraint fails"


class AlreadyExistsError(RepositoryError):
    default_message = "product code already exists"


_CONSTRAINT_ERRORS: dict[int, type[RepositoryError]] = {
    ER_NO_REFERENCED_ROW_2: ForeignKeyConstraintError,
    ER_DUP_ENTRY: AlreadyExistsError,
}


def _columns(product: Product) -> tuple[Any, ...]:
    """Values of every column but the id, in table order."""
    return astuple(product)[1:]


def _fetch_one(cursor: Any) -> Any:
    return cursor.fetchone()


def _fetch_all(cursor: Any) -> Any:
    return cursor.fetchall()


class ProductRepository:
    """Reads and writes products through a DB-API connection using ``?`` parameters."""

    def __init__(self, db: Any) -> None:
        self._db = db

    def _read(self, sql: str, params: tuple[Any, ...], fetch: Callable[[Any], T]) -> T:
        with closing(self._db.cursor()) as cursor:
            cursor.execute(sql, params)
            return fetch(cursor)

    def _write(
        self,
        sql: str,
        params: tuple[Any, ...],
        outcome: Callable[[Any], T],
        constraint_errors: Mapping[int, type[RepositoryError]],
    ) -> T:
        """Run one statement, map known constraint failures and commit."""
        try:
            with closing(self._db.cursor()) as cursor:
                try:
                    cursor.execute(sql, params)
                except Exception as exc:
                    error_class = constraint_errors.get(mysql_error_number(exc))
                    if error_class is None:
                        raise
                    raise error_class() from exc
                result = outcome(cursor)
                self._db.commit()
        except Exception as exc:
            logger.error("product statement failed: %s", exc)
            raise
        return result

    def get_all(self) -> list[Product]:
        """Return every product; the database error is raised unchanged on failure."""
        try:
            rows = self._read(GET_ALL_PRODUCTS, (), _fetch_all)
        except Exception as exc:
            logger.error("listing products failed: %s", exc)
            raise
        return [Product(*row) for row in rows]

    def get(self, product_id: int) -> Product:
        """Return the product with the given id."""
        try:
            row = self._read(GET_PRODUCT, (product_id,), _fetch_one)
        except Exception as exc:
            logger.error("reading product %s failed: %s", product_id, exc)
            raise InternalError() from exc
        if row is None:
            logger.error("product %s not found", product_id)
            raise NotFoundError()
        return Product(*row)

    def exists(self, product_code: str) -> bool:
        """Tell whether a product with this code is stored."""
        try:
            return self._read(EXISTS_PRODUCT, (product_code,), _fetch_one) is not None
        except Exception:
            return False

    def save(self, product: Product) -> int:
        """Insert the product and return its new id."""
        new_id = self._write(
            SAVE_PRODUCT, _columns(product), lambda c: c.lastrowid, _CONSTRAINT_ERRORS
        )
        return int(new_id)

    def update(self, product: Product) -> None:
        """Overwrite every column of the stored product with the same id."""
        self._write(
            UPDATE_PRODUCT,
            (*_columns(product), product.id),
            lambda c: c.rowcount,
            _CONSTRAINT_ERRORS,
        )

    def delete(self, product_id: int) -> None:
        """Remove the product with the given id."""
        affected = self._write(DELETE_PRODUCT, (product_id,), lambda c: c.rowcount, {})
        if affected < 1:
            logger.error("product %s not found", product_id)
            raise NotFoundError()