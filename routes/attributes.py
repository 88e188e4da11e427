"""
Attribute catalog API routes.

Read-only: the admin variant editor loads the catalog once per session.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
import structlog

from models.attribute import AttributeTypeWithOptions
from services.attribute_catalog_service import get_attribute_catalog_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter()


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
# ROUTES
# ===================

@router.get("", response_model=list[AttributeTypeWithOptions])
async def list_attributes(
    include_inactive: bool = Query(False, description="Include inactive types and options")
):
    """List attribute types with their options."""
    try:
        service = get_attribute_catalog_service()
        return service.get_catalog(active_only=not include_inactive)

    except Exception as e:
        return handle_error(e)


@router.get("/{type_id}", response_model=AttributeTypeWithOptions)
async def get_attribute(type_id: str):
    """
    Get one attribute type with its options.

    Raises:
        404: Attribute type not found
    """
    try:
        service = get_attribute_catalog_service()
        attribute_type = service.get_type_by_id(type_id)
        options = service.get_options(type_id=type_id)
        return AttributeTypeWithOptions(**attribute_type.model_dump(), options=options)

    except Exception as e:
        return handle_error(e)
