"""Storage of product batches in a SQL database."""

from __future__ import annotations

import logging
from contextlib import closing
from dataclasses import astuple, dataclass
from typing import Any

from stockroom.database import (
    ER_DUP_ENTRY,
    ER_NO_REFERENCED_ROW_2,
    ER_TRUNCATED_WRONG_VALUE,
    mysql_error_number,
)

logger = logging.getLogger(__name__)

SAVE_PRODUCT_BATCH = (
    "INSERT INTO product_batches (batch_number,current_quantity,current_temperature,"
    "due_date,initial_quantity,manufacturing_date,manufacturing_hour,minimum_temperature,"
    "product_id,section_id) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?);"
)


@dataclass
class ProductBatch:
    """A batch of a product stored in a section."""

    id: int = 0
    batch_number: int = 0
    current_quantity: int = 0
    current_temperature: float = 0.0
    due_date: str = ""
    initial_quantity: int = 0
    manufacturing_date: str = ""
    manufacturing_hour: int = 0
    minimum_temperature: float = 0.0
    product_id: int = 0
    section_id: int = 0


class ProductBatchError(Exception):
    """Base class of the errors raised for product batches."""

    default_message = "product batch error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NotFoundError(ProductBatchError):
    default_message = "product batch not found"


class AlreadyExistsError(ProductBatchError):
    default_message = "batch code already exists"


class DateValueError(ProductBatchError):
    default_message = "the string provided does not match the valid date format yyyy-mm-dd"


class ForeignProductNotFoundError(ProductBatchError):
    default_message = "the given id does not have a product atached to it"


class ForeignSectionNotFoundError(ProductBatchError):
    default_message = "the given id does not have a section atached to it"


class InternalError(ProductBatchError):
    default_message = "database internal error"


def _insert_error(error: BaseException) -> ProductBatchError:
    number = mysql_error_number(error)
    if number == ER_TRUNCATED_WRONG_VALUE:
        return DateValueError()
    if number == ER_NO_REFERENCED_ROW_2:
        if "product_id" in str(error):
            return ForeignProductNotFoundError()
        return ForeignSectionNotFoundError()
    if number == ER_DUP_ENTRY:
        return AlreadyExistsError()
    return InternalError()


class ProductBatchRepository:
    """Writes product batches through a DB-API connection using ``?`` parameters."""

    def __init__(self, db: Any) -> None:
        self._db = db

    def save(self, batch: ProductBatch) -> int:
        """Insert the batch and return its new id."""
        try:
            cursor = self._db.cursor()
        except Exception as exc:
            logger.error("preparing product batch insert failed: %s", exc)
            raise InternalError() from exc
        with closing(cursor):
            try:
                cursor.execute(SAVE_PRODUCT_BATCH, astuple(batch)[1:])
            except Exception as exc:
                logger.error("saving product batch failed: %s", exc)
                raise _insert_error(exc) from exc
            try:
                new_id = cursor.lastrowid
            except Exception as exc:
                logger.error("reading new product batch id failed: %s", exc)
                raise InternalError() from exc
            if new_id is None:
                logger.error("database reported no id for the new product batch")
                raise InternalError()
            self._db.commit()
        return int(new_id)