"""Storage of warehouse sections in a SQL database."""

from __future__ import annotations

import logging
from contextlib import closing, contextmanager
from dataclasses import astuple, dataclass
from typing import Any, Callable, Iterator, Sequence

from stockroom.database import ER_NO_REFERENCED_ROW_2, mysql_error_number

logger = logging.getLogger(__name__)

GET_ALL_SECTIONS = "SELECT * FROM sections;"
GET_SECTION = "SELECT * FROM sections WHERE id=?;"
EXISTS_SECTION = "SELECT section_number FROM sections WHERE section_number=?;"
SAVE_SECTION = (
    "INSERT INTO sections (section_number, current_temperature, minimum_temperature, "
    "current_capacity, minimum_capacity, maximum_capacity, warehouse_id, id_product_type) "
    "VALUES (?, ?, ?, ?, ?, ?, ?, ?);"
)
UPDATE_SECTION = (
    "UPDATE sections SET section_number=?, current_temperature=?, minimum_temperature=?, "
    "current_capacity=?, minimum_capacity=?, maximum_capacity=?, warehouse_id=?, "
    "id_product_type=? WHERE id=?;"
)
DELETE_SECTION = "DELETE FROM sections WHERE id=?;"
_PRODUCTS_COUNT_SELECT = (
    "SELECT s.id, s.section_number, IFNULL(sum(pb.current_quantity), 0) as products_count "
    "FROM product_batches as pb "
    "RIGHT JOIN sections as s ON s.id = pb.section_id "
)
PRODUCTS_BY_SECTIONS = _PRODUCTS_COUNT_SELECT + "GROUP BY s.id;"
PRODUCTS_BY_SECTION = _PRODUCTS_COUNT_SELECT + "WHERE s.id = ? GROUP BY s.id;"


@dataclass
class Section:
    """A section of a warehouse that holds products of one type."""

    id: int = 0
    section_number: int = 0
    current_temperature: float = 0.0
    minimum_temperature: float = 0.0
    current_capacity: int = 0
    minimum_capacity: int = 0
    maximum_capacity: int = 0
    warehouse_id: int = 0
    product_type_id: int = 0


@dataclass
class ProductsBySection:
    """The number of products held in one section."""

    section_id: int = 0
    section_number: int = 0
    products_count: int = 0


class SectionError(Exception):
    """Base class of the errors raised for sections."""

    default_message = "section error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NotFoundError(SectionError):
    default_message = "section not found"


class AlreadyExistsError(SectionError):
    default_message = "section code already exists"


class InternalError(SectionError):
    default_message = "database internal error"


class ForeignNotFoundError(SectionError):
    default_message = "the given id does not have a warehouse atached to it"


def _products_by_section(row: Sequence[Any]) -> ProductsBySection:
    if len(row) != 3 or any(value is None for value in row):
        logger.error("unreadable products by section row: %r", row)
        raise InternalError()
    return ProductsBySection(*row)


def _one(cursor: Any) -> Any:
    return cursor.fetchone()


def _all(cursor: Any) -> list[Any]:
    return cursor.fetchall()


class SectionRepository:
    """Reads and writes sections through a DB-API connection using ``?`` parameters."""

    def __init__(self, db: Any) -> None:
        self._db = db

    def _fetch(self, query: str, params: tuple, fetch: Callable[[Any], Any], action: str) -> Any:
        """Run a read query; any database failure becomes InternalError."""
        try:
            with closing(self._db.cursor()) as cursor:
                cursor.execute(query, params)
                return fetch(cursor)
        except Exception as exc:
            logger.error("%s failed: %s", action, exc)
            raise InternalError() from exc

    @contextmanager
    def _statement(self, action: str) -> Iterator[Any]:
        """Yield a cursor for a write, committing only when the block succeeds."""
        try:
            cursor = self._db.cursor()
        except Exception as exc:
            logger.error("preparing statement for %s failed: %s", action, exc)
            raise InternalError() from exc
        with closing(cursor):
            try:
                yield cursor
            except SectionError:
                raise
            except Exception as exc:
                logger.error("%s failed: %s", action, exc)
                raise InternalError() from exc
            self._db.commit()

    def get_all(self) -> list[Section]:
        """Return every stored section."""
        rows = self._fetch(GET_ALL_SECTIONS, (), _all, "listing sections")
        return [Section(*row) for row in rows]

    def get(self, section_id: int) -> Section:
        """Return the section with the given id."""
        row = self._fetch(GET_SECTION, (section_id,), _one, f"reading section {section_id}")
        if row is None:
            logger.error("section %s not found", section_id)
            raise NotFoundError()
        return Section(*row)

    def exists(self, section_number: int) -> bool:
        """Tell whether a section with this number is stored."""
        try:
            with closing(self._db.cursor()) as cursor:
                cursor.execute(EXISTS_SECTION, (section_number,))
                return cursor.fetchone() is not None
        except Exception:
            return False

    def save(self, section: Section) -> int:
        """Insert the section and return its new id."""
        with self._statement("saving section") as cursor:
            try:
                cursor.execute(SAVE_SECTION, astuple(section)[1:])
            except Exception as exc:
                if mysql_error_number(exc) == ER_NO_REFERENCED_ROW_2:
                    logger.error("saving section failed: %s", exc)
                    raise ForeignNotFoundError() from exc
                raise
            new_id = cursor.lastrowid
            if new_id is None:
                logger.error("database reported no id for the new section")
                raise InternalError()
        return int(new_id)

    def update(self, section: Section) -> None:
        """Overwrite every column of the stored section with the same id."""
        with self._statement(f"updating section {section.id}") as cursor:
            cursor.execute(UPDATE_SECTION, (*astuple(section)[1:], section.id))
            _ = cursor.rowcount

    def delete(self, section_id: int) -> None:
        """Remove the section with the given id."""
        with self._statement(f"deleting section {section_id}") as cursor:
            cursor.execute(DELETE_SECTION, (section_id,))
            affected = cursor.rowcount
        if affected < 1:
            logger.error("section %s not found", section_id)
            raise NotFoundError()

    def get_products_by_sections(self) -> list[ProductsBySection]:
        """Return the number of products held in every section."""
        rows = self._fetch(PRODUCTS_BY_SECTIONS, (), _all, "counting products by section")
        return [_products_by_section(row) for row in rows]

    def get_products_by_section(self, section_id: int) -> list[ProductsBySection]:
        """Return the number of products held in one section, as a one-element list."""
        row = self._fetch(
            PRODUCTS_BY_SECTION, (section_id,), _one, f"counting products of section {section_id}"
        )
        if row is None:
            logger.error("section %s not found", section_id)
            raise NotFoundError()
        return [_products_by_section(row)]