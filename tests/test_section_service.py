from dataclasses import replace

import pytest

from stockroom.section_repository import (
    AlreadyExistsError,
    InternalError,
    NotFoundError,
    ProductsBySection,
    Section,
)
from stockroom.section_service import SectionService


def make_section(**overrides):
    values = dict(
        id=1,
        section_number=1,
        current_temperature=2.0,
        minimum_temperature=-1.0,
        current_capacity=100,
        minimum_capacity=10,
        maximum_capacity=1000,
        warehouse_id=1,
        product_type_id=1,
    )
    values.update(overrides)
    return Section(**values)


class FakeSectionRepository:
    def __init__(self, sections=(), products=(), error=None, get_error=None):
        self.sections = list(sections)
        self.products = list(products)
        self.error = error
        self.get_error = get_error
        self.saved = []
        self.updated = []

    def get_all(self):
        return list(self.sections)

    def get(self, section_id):
        if self.get_error is not None:
            raise self.get_error
        for section in self.sections:
            if section.id == section_id:
                return replace(section)
        raise NotFoundError()

    def exists(self, section_number):
        return any(s.section_number == section_number for s in self.sections)

    def save(self, section):
        if self.error is not None:
            raise self.error
        new_id = len(self.sections) + 1
        self.sections.append(replace(section, id=new_id))
        self.saved.append(section)
        return new_id

    def update(self, section):
        if self.error is not None:
            raise self.error
        self.updated.append(section)
        self.sections = [section if s.id == section.id else s for s in self.sections]

    def delete(self, section_id):
        remaining = [s for s in self.sections if s.id != section_id]
        if len(remaining) == len(self.sections):
            raise NotFoundError()
        self.sections = remaining

    def get_products_by_sections(self):
        if self.error is not None:
            raise self.error
        return list(self.products)

    def get_products_by_section(self, section_id):
        if self.error is not None:
            raise self.error
        found = [p for p in self.products if p.section_id == section_id]
        if not found:
            raise NotFoundError()
        return found


PRODUCTS = [
    ProductsBySection(section_id=1, section_number=1, products_count=100),
    ProductsBySection(section_id=2, section_number=2, products_count=90),
]


def test_create_ok():
    repository = FakeSectionRepository()
    result = SectionService(repository).create(make_section(id=0))
    assert result == make_section()
    assert repository.sections == [make_section()]


def test_create_conflict():
    repository = FakeSectionRepository(sections=[make_section()])
    with pytest.raises(AlreadyExistsError) as excinfo:
        SectionService(repository).create(make_section())
    assert str(excinfo.value) == "section code already exists"
    assert repository.saved == []


def test_create_internal_error():
    repository = FakeSectionRepository(error=InternalError())
    with pytest.raises(InternalError) as excinfo:
        SectionService(repository).create(Section())
    assert str(excinfo.value) == "database internal error"


def test_get_all():
    sections = [
        make_section(),
        make_section(id=2, section_number=2, current_temperature=3.0, product_type_id=2),
    ]
    repository = FakeSectionRepository(sections=sections)
    assert SectionService(repository).get_all() == sections


def test_get_non_existent():
    repository = FakeSectionRepository(get_error=NotFoundError())
    with pytest.raises(NotFoundError) as excinfo:
        SectionService(repository).get(1)
    assert str(excinfo.value) == "section not found"


def test_get_existent():
    repository = FakeSectionRepository(sections=[make_section()])
    assert SectionService(repository).get(1) == make_section()


def test_update_with_empty_values_keeps_section():
    repository = FakeSectionRepository(sections=[make_section()])
    result = SectionService(repository).update(
        Section(id=1, current_temperature=-273, minimum_temperature=-273)
    )
    assert result == make_section()


def test_update_with_values_changes_section():
    repository = FakeSectionRepository(sections=[make_section()])
    expected = Section(
        id=1,
        section_number=2,
        current_temperature=3.0,
        minimum_temperature=-2.0,
        current_capacity=90,
        minimum_capacity=20,
        maximum_capacity=1100,
        warehouse_id=2,
        product_type_id=2,
    )
    result = SectionService(repository).update(expected)
    assert result == expected
    assert repository.updated == [expected]


def test_update_zero_temperature_is_applied():
    repository = FakeSectionRepository(sections=[make_section()])
    result = SectionService(repository).update(Section(id=1))
    assert result == make_section(current_temperature=0.0, minimum_temperature=0.0)


def test_update_non_existent():
    repository = FakeSectionRepository(get_error=NotFoundError())
    with pytest.raises(NotFoundError):
        SectionService(repository).update(Section())
    assert repository.updated == []


def test_update_existent_section_number():
    repository = FakeSectionRepository(
        sections=[make_section(), make_section(id=2, section_number=2)]
    )
    with pytest.raises(AlreadyExistsError) as excinfo:
        SectionService(repository).update(make_section(section_number=2))
    assert str(excinfo.value) == "section code already exists"
    assert repository.updated == []


def test_update_internal_error():
    repository = FakeSectionRepository(sections=[make_section()], error=InternalError())
    with pytest.raises(InternalError) as excinfo:
        SectionService(repository).update(Section(id=1))
    assert str(excinfo.value) == "database internal error"


def test_delete_non_existent():
    repository = FakeSectionRepository(get_error=NotFoundError())
    with pytest.raises(NotFoundError) as excinfo:
        SectionService(repository).delete(1)
    assert str(excinfo.value) == "section not found"


def test_delete_ok():
    repository = FakeSectionRepository(sections=[make_section()])
    service = SectionService(repository)
    service.delete(1)
    assert service.get_all() == []


def test_exists_raises_when_taken():
    repository = FakeSectionRepository(sections=[make_section()])
    with pytest.raises(AlreadyExistsError):
        SectionService(repository).exists(1)


def test_exists_returns_none_when_free():
    repository = FakeSectionRepository(sections=[make_section()])
    assert SectionService(repository).exists(5) is None


def test_get_all_section_products():
    repository = FakeSectionRepository(products=PRODUCTS)
    assert SectionService(repository).get_section_products(0) == PRODUCTS


def test_get_section_products():
    repository = FakeSectionRepository(products=PRODUCTS)
    assert SectionService(repository).get_section_products(1) == [PRODUCTS[0]]


def test_get_section_products_id_not_existent():
    repository = FakeSectionRepository(error=NotFoundError())
    with pytest.raises(NotFoundError) as excinfo:
        SectionService(repository).get_section_products(3)
    assert str(excinfo.value) == "section not found"