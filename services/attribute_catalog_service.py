"""
Attribute catalog service: read-only access to attribute types and options.

Tables: variant_types, variant_options.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.attribute import (
    AttributeStatus,
    AttributeType,
    AttributeOption,
    AttributeTypeWithOptions,
)
from exceptions import AttributeTypeNotFoundError, DatabaseError

logger = structlog.get_logger(__name__)


class AttributeCatalogService:
    """
    Attribute catalog reads.

    The catalog is fetched once per editing session and treated as
    read-only input by the combination generator.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.types_table = "variant_types"
        self.options_table = "variant_options"

    def get_attribute_types(self, active_only: bool = True) -> list[AttributeType]:
        """
        Get attribute types ordered by sort_order.

        Args:
            active_only: Only return active types

        Returns:
            List of AttributeType
        """
        logger.debug("getting_attribute_types", active_only=active_only)

        try:
            query = self.db.table(self.types_table).select("*")
            if active_only:
                query = query.eq("status", AttributeStatus.ACTIVE.value)
            result = query.order("sort_order").execute()

            return [AttributeType(**row) for row in result.data]

        except Exception as e:
            logger.error("get_attribute_types_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_type_by_id(self, type_id: str) -> AttributeType:
        """
        Get a single attribute type.

        Raises:
            AttributeTypeNotFoundError: If the type doesn't exist
        """
        logger.debug("getting_attribute_type", type_id=type_id)

        try:
            result = (
                self.db.table(self.types_table)
                .select("*")
                .eq("id", type_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_attribute_type_failed", type_id=type_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise AttributeTypeNotFoundError(type_id)

        return AttributeType(**result.data[0])

    def get_options(
        self,
        type_id: Optional[str] = None,
        active_only: bool = True
    ) -> list[AttributeOption]:
        """
        Get attribute options ordered by sort_order.

        Args:
            type_id: Only options of this type
            active_only: Only return active options

        Returns:
            List of AttributeOption
        """
        logger.debug("getting_attribute_options", type_id=type_id)

        try:
            query = self.db.table(self.options_table).select("*")
            if type_id:
                query = query.eq("type_id", type_id)
            if active_only:
                query = query.eq("status", AttributeStatus.ACTIVE.value)
            result = query.order("sort_order").execute()

            return [AttributeOption(**row) for row in result.data]

        except Exception as e:
            logger.error("get_attribute_options_failed", type_id=type_id, error=str(e))
            raise DatabaseError("select", str(e))

    def get_catalog(self, active_only: bool = True) -> list[AttributeTypeWithOptions]:
        """
        Get every attribute type with its options.

        Returns:
            Types in sort order, each with its options in sort order
        """
        types = self.get_attribute_types(active_only=active_only)
        options = self.get_options(active_only=active_only)

        by_type: dict[str, list[AttributeOption]] = {}
        for option in options:
            by_type.setdefault(option.type_id, []).append(option)

        catalog = [
            AttributeTypeWithOptions(
                **attribute_type.model_dump(),
                options=by_type.get(attribute_type.id, [])
            )
            for attribute_type in types
        ]

        logger.info(
            "attribute_catalog_loaded",
            types=len(catalog),
            options=len(options)
        )

        return catalog


# Singleton instance for convenience
_catalog_service: Optional[AttributeCatalogService] = None

def get_attribute_catalog_service() -> AttributeCatalogService:
    """Get or create AttributeCatalogService instance."""
    global _catalog_service
    if _catalog_service is None:
        _catalog_service = AttributeCatalogService()
    return _catalog_service
