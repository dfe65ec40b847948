"""Creation of product batches on top of a product batch repository."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from stockroom.product_batch_repository import ProductBatch

logger = logging.getLogger(__name__)


class ProductBatchService:
    """Creates product batches."""

    def __init__(self, repository: Any) -> None:
        self._repository = repository

    def create(self, batch: ProductBatch) -> ProductBatch:
        """Store the batch and return it with its new id.

        Errors raised by the repository are passed on unchanged.
        """
        try:
            new_id = self._repository.save(batch)
        except Exception as exc:
            logger.error("creating product batch failed: %s", exc)
            raise
        return replace(batch, id=new_id)