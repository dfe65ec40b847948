"""Business rules for sections on top of a section repository."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from stockroom.section_repository import AlreadyExistsError, ProductsBySection, Section

logger = logging.getLogger(__name__)

# Temperatures at or below absolute zero mean "leave unchanged" in an update.
_ABSOLUTE_ZERO = -273


class SectionService:
    """Lists, creates, updates and removes sections."""

    def __init__(self, repository: Any) -> None:
        self._repository = repository

    def get_all(self) -> list[Section]:
        """Return every stored section."""
        return self._repository.get_all()

    def get(self, section_id: int) -> Section:
        """Return the section with the given id."""
        return self._repository.get(section_id)

    def create(self, section: Section) -> Section:
        """Store a section with a unique number and return it with its new id."""
        try:
            self.exists(section.section_number)
            new_id = self._repository.save(section)
        except Exception as exc:
            logger.error("creating section failed: %s", exc)
            raise
        return replace(section, id=new_id)

    def update(self, section: Section) -> Section:
        """Update the stored section with the set values of ``section``.

        Zero numbers and temperatures at or below -273 leave the stored value as
        it is. A new section number must not be taken by another section.
        """
        try:
            current = self.get(section.id)
            changes: dict[str, Any] = {}
            if section.section_number != 0 and section.section_number != current.section_number:
                self.exists(section.section_number)
                changes["section_number"] = section.section_number
            for name in ("current_temperature", "minimum_temperature"):
                value = getattr(section, name)
                if value > _ABSOLUTE_ZERO:
                    changes[name] = value
            for name in (
                "current_capacity",
                "minimum_capacity",
                "maximum_capacity",
                "warehouse_id",
                "product_type_id",
            ):
                value = getattr(section, name)
                if value != 0:
                    changes[name] = value
            updated = replace(current, **changes)
            self._repository.update(updated)
        except Exception as exc:
            logger.error("updating section %s failed: %s", section.id, exc)
            raise
        return updated

    def delete(self, section_id: int) -> None:
        """Remove the section with the given id."""
        try:
            self._repository.get(section_id)
            self._repository.delete(section_id)
        except Exception as exc:
            logger.error("deleting section %s failed: %s", section_id, exc)
            raise

    def exists(self, section_number: int) -> None:
        """Raise AlreadyExistsError if a section with this number is stored."""
        if self._repository.exists(section_number):
            raise AlreadyExistsError()

    def get_section_products(self, section_id: int) -> list[ProductsBySection]:
        """Return product counts of every section when the id is 0, else of that one."""
        if section_id == 0:
            return self._repository.get_products_by_sections()
        return self._repository.get_products_by_section(section_id)