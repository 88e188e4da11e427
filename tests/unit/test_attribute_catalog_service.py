"""
Unit tests for AttributeCatalogService.

Run: pytest tests/unit/test_attribute_catalog_service.py -v
"""

import pytest
from unittest.mock import MagicMock

from services.attribute_catalog_service import AttributeCatalogService
from models.attribute import AttributeStatus
from exceptions import AttributeTypeNotFoundError, DatabaseError

from tests.factories import AttributeFactory


@pytest.fixture
def catalog_rows(color_size_catalog):
    color, size, options = color_size_catalog
    return (
        [AttributeFactory.type_row(color), AttributeFactory.type_row(size)],
        [AttributeFactory.option_row(option) for option in options.values()],
    )


class TestGetAttributeTypes:
    """Tests for AttributeCatalogService.get_attribute_types()"""

    def test_returns_types(self, mock_db, mock_supabase, catalog_rows):
        # Arrange
        type_rows, _ = catalog_rows
        mock_supabase.set_table_data("variant_types", type_rows)
        service = AttributeCatalogService()

        # Act
        types = service.get_attribute_types()

        # Assert
        assert [t.name for t in types] == ["color", "size"]
        assert types[0].display_name == "Color"
        assert types[0].status == AttributeStatus.ACTIVE

    def test_active_filter_applied(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("variant_types", [])
        service = AttributeCatalogService()

        service.get_attribute_types(active_only=True)

        assert ("eq", ("status", "active")) in mock_supabase.calls["variant_types"]

    def test_database_failure_raises(self, mock_db):
        service = AttributeCatalogService()
        service.db = MagicMock()
        service.db.table.side_effect = Exception("connection refused")

        with pytest.raises(DatabaseError) as exc_info:
            service.get_attribute_types()

        assert exc_info.value.status_code == 500


class TestGetTypeById:
    """Tests for AttributeCatalogService.get_type_by_id()"""

    def test_returns_type(self, mock_db, mock_supabase, catalog_rows):
        type_rows, _ = catalog_rows
        mock_supabase.set_table_data("variant_types", type_rows[:1])
        service = AttributeCatalogService()

        attribute_type = service.get_type_by_id("t-color")

        assert attribute_type.id == "t-color"

    def test_not_found_raises(self, mock_db, mock_supabase):
        mock_supabase.set_table_data("variant_types", [])
        service = AttributeCatalogService()

        with pytest.raises(AttributeTypeNotFoundError) as exc_info:
            service.get_type_by_id("t-missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.code == "ATTRIBUTE_TYPE_NOT_FOUND"


class TestGetCatalog:
    """Tests for AttributeCatalogService.get_catalog()"""

    def test_groups_options_under_types(self, mock_db, mock_supabase, catalog_rows):
        # Arrange
        type_rows, option_rows = catalog_rows
        mock_supabase.set_table_data("variant_types", type_rows)
        mock_supabase.set_table_data("variant_options", option_rows)
        service = AttributeCatalogService()

        # Act
        catalog = service.get_catalog()

        # Assert
        assert [t.id for t in catalog] == ["t-color", "t-size"]
        assert [o.value for o in catalog[0].options] == ["red", "blue"]
        assert [o.value for o in catalog[1].options] == ["s", "m"]
        assert catalog[0].options[0].hex_color == "#FF0000"

    def test_type_without_options(self, mock_db, mock_supabase, catalog_rows):
        type_rows, _ = catalog_rows
        mock_supabase.set_table_data("variant_types", type_rows)
        mock_supabase.set_table_data("variant_options", [])
        service = AttributeCatalogService()

        catalog = service.get_catalog()

        assert all(t.options == [] for t in catalog)
