"""
API tests for attribute and variant routes.

Services are patched; these check request parsing, status codes and the
error body format.

Run: pytest tests/test_variant_routes.py -v
"""

import pytest
from unittest.mock import patch, MagicMock

from services.variant_selection_service import build_selection_response
from exceptions import (
    AttributeTypeNotFoundError,
    DuplicateSkuError,
    NoActiveAttributeTypesError,
)

from tests.factories import VariantFactory


@pytest.fixture
def grid_variants(color_size_catalog):
    color, size, options = color_size_catalog
    return VariantFactory.color_size_grid(color, size, options)


class TestGenerateRoute:
    """POST /api/products/{product_id}/variants/generate"""

    def test_returns_generated_list(self, test_client, grid_variants):
        editor = MagicMock()
        editor.generate.return_value = grid_variants

        with patch("routes.variants.get_variant_editor_service", return_value=editor):
            response = test_client.post(
                "/api/products/prod-1/variants/generate",
                json={"selected_option_ids": {"t-color": ["o-color-red"]}},
            )

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 4
        assert body["data"][0]["sku"] == "RED-S"
        request = editor.generate.call_args.args[0]
        assert request.selected_option_ids == {"t-color": ["o-color-red"]}

    def test_error_body(self, test_client):
        editor = MagicMock()
        editor.generate.side_effect = NoActiveAttributeTypesError()

        with patch("routes.variants.get_variant_editor_service", return_value=editor):
            response = test_client.post("/api/products/prod-1/variants/generate", json={})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "NO_ACTIVE_ATTRIBUTE_TYPES"


class TestSaveRoutes:
    """Validate, list and save endpoints."""

    def test_validate_ok(self, test_client, grid_variants):
        editor = MagicMock()

        with patch("routes.variants.get_variant_editor_service", return_value=editor):
            response = test_client.post(
                "/api/products/prod-1/variants/validate",
                json={"variants": [v.model_dump(mode="json") for v in grid_variants]},
            )

        assert response.status_code == 200
        assert response.json() == {"valid": True, "count": 4}

    def test_save_duplicate_sku(self, test_client, grid_variants):
        variant_service = MagicMock()
        variant_service.save_variants.side_effect = DuplicateSkuError("RED-S", [0, 1])

        with patch("routes.variants.get_product_variant_service", return_value=variant_service):
            response = test_client.put(
                "/api/products/prod-1/variants",
                json={"variants": [v.model_dump(mode="json") for v in grid_variants]},
            )

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "DUPLICATE_SKU"
        assert error["details"] == {"sku": "RED-S", "indexes": [0, 1]}

    def test_list_variants(self, test_client, grid_variants):
        variant_service = MagicMock()
        variant_service.get_variants.return_value = grid_variants

        with patch("routes.variants.get_product_variant_service", return_value=variant_service):
            response = test_client.get("/api/products/prod-1/variants")

        assert response.status_code == 200
        assert [v["id"] for v in response.json()["data"]] == ["v-red-s", "v-red-m", "v-blue-s", "v-blue-m"]

    def test_unexpected_error_is_internal(self, test_client):
        variant_service = MagicMock()
        variant_service.get_variants.side_effect = RuntimeError("boom")

        with patch("routes.variants.get_product_variant_service", return_value=variant_service):
            response = test_client.get("/api/products/prod-1/variants")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"


class TestSelectRoute:
    """POST /api/products/{product_id}/variants/select"""

    def test_select(self, test_client, color_size_catalog, grid_variants):
        color, size, options = color_size_catalog
        selection = {color.id: options["red"].id, size.id: options["m"].id}
        selection_service = MagicMock()
        selection_service.select.return_value = build_selection_response(grid_variants, selection)

        with patch("routes.variants.get_variant_selection_service", return_value=selection_service):
            response = test_client.post(
                "/api/products/prod-1/variants/select",
                json={"selection": selection},
            )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "matched"
        assert body["is_complete"] is True
        assert body["variant"]["id"] == "v-red-m"
        selection_service.select.assert_called_once_with("prod-1", selection, include_inactive=False)


class TestAttributeRoutes:
    """GET /api/attributes"""

    def test_unknown_type(self, test_client):
        catalog_service = MagicMock()
        catalog_service.get_type_by_id.side_effect = AttributeTypeNotFoundError("t-missing")

        with patch("routes.attributes.get_attribute_catalog_service", return_value=catalog_service):
            response = test_client.get("/api/attributes/t-missing")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ATTRIBUTE_TYPE_NOT_FOUND"

    def test_catalog_failure_is_internal(self, test_client):
        catalog_service = MagicMock()
        catalog_service.get_catalog.side_effect = RuntimeError("boom")

        with patch("routes.attributes.get_attribute_catalog_service", return_value=catalog_service):
            response = test_client.get("/api/attributes")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"
