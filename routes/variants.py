"""
Product variant API routes.

Admin: regenerate the variant grid, validate and save the final list.
Storefront: apply a shopper's attribute selection.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from models.variant import (
    GenerateVariantsRequest,
    SaveVariantsRequest,
    VariantListResponse,
)
from models.variant_selection import SelectionRequest, VariantSelectionResponse
from services.variant_editor_service import get_variant_editor_service
from services.product_variant_service import get_product_variant_service
from services.variant_selection_service import get_variant_selection_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/products", tags=["Variants"])


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# ADMIN
# ===================

@router.post("/{product_id}/variants/generate", response_model=VariantListResponse)
async def generate_variants(product_id: str, data: GenerateVariantsRequest):
    """
    Regenerate the variant grid from the ticked options.

    Nothing is saved; the operator reviews and edits the result first.

    Raises:
        404: Unknown attribute type
        422: No option ticked, or too many combinations
    """
    try:
        service = get_variant_editor_service()
        variants = service.generate(data)

        logger.info("variant_grid_generated", product_id=product_id, count=len(variants))

        return VariantListResponse(data=variants, total=len(variants))

    except Exception as e:
        return handle_error(e)


@router.post("/{product_id}/variants/validate")
async def validate_variants(product_id: str, data: SaveVariantsRequest):
    """
    Check a variant list without saving it.

    Raises:
        422: Missing variants, invalid row, duplicate SKU or combination
    """
    try:
        service = get_variant_editor_service()
        service.validate(data.variants)
        return {"valid": True, "count": len(data.variants)}

    except Exception as e:
        return handle_error(e)


@router.get("/{product_id}/variants", response_model=VariantListResponse)
async def list_variants(product_id: str):
    """Get a product's saved variants."""
    try:
        service = get_product_variant_service()
        variants = service.get_variants(product_id)
        return VariantListResponse(data=variants, total=len(variants))

    except Exception as e:
        return handle_error(e)


@router.put("/{product_id}/variants", response_model=VariantListResponse)
async def save_variants(product_id: str, data: SaveVariantsRequest):
    """
    Validate and save a product's variants, replacing the stored list.

    Raises:
        422: Validation failed (nothing is written)
    """
    try:
        service = get_product_variant_service()
        variants = service.save_variants(product_id, data.variants)
        return VariantListResponse(data=variants, total=len(variants))

    except Exception as e:
        return handle_error(e)


# ===================
# STOREFRONT
# ===================

@router.post("/{product_id}/variants/select", response_model=VariantSelectionResponse)
async def select_variant(product_id: str, data: SelectionRequest):
    """
    Apply an attribute selection.

    Returns the matched variant (or none), option availability for every
    selector and the price/stock/image summary.
    """
    try:
        service = get_variant_selection_service()
        return service.select(
            product_id,
            data.selection,
            include_inactive=data.include_inactive
        )

    except Exception as e:
        return handle_error(e)
