"""Storage of product price records in a SQL database."""

from __future__ import annotations

import logging
from contextlib import closing
from dataclasses import astuple, dataclass, field
from datetime import datetime
from typing import Any

from stockroom.database import ER_NO_REFERENCED_ROW_2, mysql_error_number

__all__ = [
    "ForeignKeyConstraintError",
    "GET_PRODUCT_RECORD",
    "InternalError",
    "NotFoundError",
    "ProductRecord",
    "ProductRecordRepository",
    "RepositoryError",
    "SAVE_PRODUCT_RECORD",
]

logger = logging.getLogger(__name__)

SAVE_PRODUCT_RECORD = (
    "INSERT INTO `product_records`(`last_update_date`, `purchase_price`, `sale_price`, "
    "`product_id`) VALUES (?, ?, ?, ?);"
)
GET_PRODUCT_RECORD = (
    "SELECT `id`, `last_update_date`, `purchase_price`, `sale_price`, `product_id` "
    "FROM `product_records` WHERE `id` = ?;"
)


@dataclass
class ProductRecord:
    """A dated purchase and sale price of a product."""

    id: int = 0
    last_update_date: datetime = field(default_factory=lambda: datetime(1, 1, 1))
    purchase_price: float = 0.0
    sale_price: float = 0.0
    product_id: int = 0


class RepositoryError(Exception):
    """Base class of the errors raised by the product record storage."""

    default_message = "product record repository error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NotFoundError(RepositoryError):
    default_message = "product record not found in database"


class InternalError(RepositoryError):
    default_message = "database internal error"


class ForeignKeyConstraintError(RepositoryError):
    default_message = "a foreign key constraint fails"


class ProductRecordRepository:
    """Reads and writes product records through a DB-API connection."""

    def __init__(self, db: Any) -> None:
        self._db = db

    def get(self, record_id: int) -> ProductRecord:
        """Return the record with the given id."""
        try:
            with closing(self._db.cursor()) as cursor:
                cursor.execute(GET_PRODUCT_RECORD, (record_id,))
                row = cursor.fetchone()
        except Exception as exc:
            logger.error("reading product record %s failed: %s", record_id, exc)
            raise InternalError() from exc
        if row is None:
            logger.error("product record %s not found", record_id)
            raise NotFoundError()
        return ProductRecord(*row)

    def save(self, record: ProductRecord) -> int:
        """Insert the record and return its new id."""
        try:
            with closing(self._db.cursor()) as cursor:
                try:
                    cursor.execute(SAVE_PRODUCT_RECORD, astuple(record)[1:])
                except Exception as exc:
                    if mysql_error_number(exc) == ER_NO_REFERENCED_ROW_2:
                        raise ForeignKeyConstraintError() from exc
                    raise
                new_id = cursor.lastrowid
                self._db.commit()
        except Exception as exc:
            logger.error("saving product record failed: %s", exc)
            raise
        return int(new_id)