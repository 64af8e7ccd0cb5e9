import pytest

from bistro.schemas.dine_in import TableStatus
from bistro.services.table_registry import TableNotFoundError, TableRegistry

def test_registry_numbers_tables_from_one():
    registry = TableRegistry(6)
    assert [t.number for t in registry.all()] == [1, 2, 3, 4, 5, 6]
    assert all(t.status == TableStatus.AVAILABLE for t in registry.all())

def test_registry_size_is_configurable():
    assert len(TableRegistry(12).all()) == 12
    with pytest.raises(ValueError):
        TableRegistry(0)

def test_find_and_set_status():
    registry = TableRegistry(3)
    assert registry.find_by_number(4) is None
    registry.set_status(2, TableStatus.OCCUPIED)
    assert registry.find_by_number(2).status == TableStatus.OCCUPIED
    with pytest.raises(TableNotFoundError):
        registry.set_status(9, TableStatus.OCCUPIED)

def test_reset_frees_every_table():
    registry = TableRegistry(2)
    registry.set_status(1, TableStatus.OCCUPIED)
    registry.reset()
    assert registry.find_by_number(1).status == TableStatus.AVAILABLE
