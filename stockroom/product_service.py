"""Business rules for products on top of a product repository."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import fields, replace
from typing import Any, Callable, Iterator

from stockroom import product_repository as repo
from stockroom.product_repository import Product

logger = logging.getLogger(__name__)

_ALWAYS_KEPT = {"id", "product_code", "seller_id"}


class ServiceError(Exception):
    """Base class of the errors raised by the product service."""

    default_message = "product service error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NotFoundError(ServiceError):
    default_message = "product not found"


class InternalError(ServiceError):
    default_message = "internal error"


class AlreadyExistsError(ServiceError):
    default_message = "product code already exists"


class SellerNotFoundError(ServiceError):
    default_message = "seller not found"


def _internal_error(error: Exception) -> ServiceError:
    return InternalError()


def _lookup_error(error: Exception) -> ServiceError:
    return NotFoundError() if isinstance(error, repo.NotFoundError) else InternalError()


def _write_error(error: Exception) -> ServiceError:
    if isinstance(error, repo.ForeignKeyConstraintError):
        return SellerNotFoundError()
    if isinstance(error, repo.AlreadyExistsError):
        return AlreadyExistsError()
    return InternalError()


@contextmanager
def _translated(action: str, translate: Callable[[Exception], ServiceError]) -> Iterator[None]:
    """Log a repository failure and raise the service error it stands for."""
    try:
        yield
    except Exception as exc:
        logger.error("%s failed: %s", action, exc)
        raise translate(exc) from exc


class ProductService:
    """Lists, creates, updates and removes products."""

    def __init__(self, repository: Any) -> None:
        self._repository = repository

    def get_all(self) -> list[Product]:
        """Return every stored product."""
        with _translated("listing products", _internal_error):
            return self._repository.get_all()

    def get(self, product_id: int) -> Product:
        """Return the product with the given id."""
        with _translated(f"reading product {product_id}", _lookup_error):
            return self._repository.get(product_id)

    def save(self, product: Product) -> Product:
        """Store a new product with a unique code and return it as stored."""
        if self._repository.exists(product.product_code):
            raise AlreadyExistsError()
        with _translated("saving product", _write_error):
            new_id = self._repository.save(product)
        return self.get(new_id)

    def partial_update(self, product_id: int, product: Product) -> Product:
        """Update the stored product with the non-zero fields of ``product``.

        Empty strings, zero numbers and a missing seller leave the stored value
        as it is. A new product code must not be taken by another product.
        """
        original = self.get(product_id)
        changes = {
            field.name: getattr(product, field.name)
            for field in fields(Product)
            if field.name not in _ALWAYS_KEPT and getattr(product, field.name)
        }
        if product.seller_id is not None:
            changes["seller_id"] = product.seller_id
        updated = replace(original, **changes)
        if product.product_code and product.product_code != updated.product_code:
            updated = replace(updated, product_code=product.product_code)
            if self._repository.exists(updated.product_code):
                raise AlreadyExistsError()
        with _translated(f"updating product {product_id}", _write_error):
            self._repository.update(updated)
        return self.get(product_id)

    def delete(self, product_id: int) -> None:
        """Remove the product with the given id."""
        with _translated(f"deleting product {product_id}", _lookup_error):
            self._repository.delete(product_id)