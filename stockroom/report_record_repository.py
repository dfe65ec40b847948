"""Reports of how many price records each product has."""

from __future__ import annotations

import logging
from contextlib import closing
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

GET_ALL_REPORT_RECORDS = (
    "SELECT `products`.`id` AS `product_id`, `products`.`description` AS `description`, "
    "COUNT(`product_records`.`id`) AS `records_count` FROM `products` "
    "LEFT JOIN `product_records` ON `products`.`id` = `product_records`.`product_id` "
    "GROUP BY `product_records`.`product_id`, `products`.`id`, `products`.`description`"
)
GET_REPORT_RECORD = (
    "SELECT `products`.`id` AS `product_id`, `products`.`description` AS `description`, "
    "COUNT(`product_records`.`id`) AS `records_count` FROM `products` "
    "LEFT JOIN `product_records` ON `products`.`id` = `product_records`.`product_id` "
    "WHERE `products`.`id` = ? "
    "GROUP BY `product_records`.`product_id`, `products`.`id`, `products`.`description`;"
)


@dataclass
class ReportRecord:
    """A product with the number of price records stored for it."""

    product_id: int = 0
    description: str = ""
    records_count: int = 0


class RepositoryError(Exception):
    """Base class of the errors raised by the report record repository."""

    default_message = "report record repository error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NotFoundError(RepositoryError):
    default_message = "product not found in database"


class InternalError(RepositoryError):
    default_message = "database internal error"


class ReportRecordRepository:
    """Reads record counts through a DB-API connection using ``?`` parameters."""

    def __init__(self, db: Any) -> None:
        self._db = db

    def get_all(self) -> list[ReportRecord]:
        """Return the record count of every product; database errors are raised unchanged."""
        try:
            with closing(self._db.cursor()) as cursor:
                cursor.execute(GET_ALL_REPORT_RECORDS)
                rows = cursor.fetchall()
        except Exception as exc:
            logger.error("listing report records failed: %s", exc)
            raise
        return [ReportRecord(*row) for row in rows]

    def get(self, product_id: int) -> ReportRecord:
        """Return the record count of one product."""
        try:
            with closing(self._db.cursor()) as cursor:
                cursor.execute(GET_REPORT_RECORD, (product_id,))
                row = cursor.fetchone()
        except Exception as exc:
            logger.error("reading report of product %s failed: %s", product_id, exc)
            raise InternalError() from exc
        if row is None:
            logger.error("product %s not found", product_id)
            raise NotFoundError()
        return ReportRecord(*row)