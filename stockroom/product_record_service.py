"""Business rules for product records on top of a product record repository."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any

from stockroom import product_record_repository as repo
from stockroom.product_record_repository import ProductRecord

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class of the errors raised by the product record service."""

    default_message = "product record service error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NotFoundError(ServiceError):
    default_message = "product not found"


class InternalError(ServiceError):
    default_message = "internal error"


class ProductNotFoundError(ServiceError):
    default_message = "product not found"


class InvalidDateError(ServiceError):
    default_message = "invalid date"


def _start_of_today(reference: datetime) -> datetime:
    """Midnight of today's date, in UTC for aware references."""
    today = date.today()
    if reference.tzinfo is None:
        return datetime(today.year, today.month, today.day)
    return datetime(today.year, today.month, today.day, tzinfo=timezone.utc)


class ProductRecordService:
    """Reads and creates product records."""

    def __init__(self, repository: Any) -> None:
        self._repository = repository

    def get(self, record_id: int) -> ProductRecord:
        """Return the record with the given id."""
        try:
            return self._repository.get(record_id)
        except repo.NotFoundError as exc:
            logger.error("product record %s not found: %s", record_id, exc)
            raise NotFoundError() from exc
        except Exception as exc:
            logger.error("reading product record %s failed: %s", record_id, exc)
            raise InternalError() from exc

    def save(self, record: ProductRecord) -> ProductRecord:
        """Store a record dated today or later and return it as stored."""
        moment = record.last_update_date
        if moment < _start_of_today(moment):
            logger.error("product record dated in the past: %s", moment)
            raise InvalidDateError()
        try:
            new_id = self._repository.save(record)
        except repo.ForeignKeyConstraintError as exc:
            logger.error("saving product record failed: %s", exc)
            raise ProductNotFoundError() from exc
        except Exception as exc:
            logger.error("saving product record failed: %s", exc)
            raise InternalError() from exc
        return self.get(new_id)