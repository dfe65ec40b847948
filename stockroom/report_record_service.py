"""Reports of price records per product on top of a report record repository."""

from __future__ import annotations

import logging
from typing import Any

from stockroom import report_record_repository as repo
from stockroom.report_record_repository import ReportRecord

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class of the errors raised by the report record service."""

    default_message = "report record service error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NotFoundError(ServiceError):
    default_message = "product record not found"


class InternalError(ServiceError):
    default_message = "database internal error"


class ReportRecordService:
    """Reports how many price records products have."""

    def __init__(self, repository: Any) -> None:
        self._repository = repository

    def get(self, product_id: int | None = None) -> list[ReportRecord]:
        """Return the report of every product, or only of ``product_id`` when given."""
        if product_id is None:
            try:
                reports = self._repository.get_all()
            except Exception as exc:
                logger.error("listing report records failed: %s", exc)
                raise InternalError() from exc
            return list(reports or [])
        try:
            return [self._repository.get(product_id)]
        except repo.NotFoundError as exc:
            logger.error("product %s not found: %s", product_id, exc)
            raise NotFoundError() from exc
        except Exception as exc:
            logger.error("reading report of product %s failed: %s", product_id, exc)
            raise InternalError() from exc