"""
Product variant persistence.

Loads and saves a product's variant list in the product_variants table.
Saving validates the whole list first; nothing is written when
validation fails.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.variant import Variant
from services.variant_validation_service import validate_variants
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)


class ProductVariantService:
    """
    Variant storage for products.

    Variants are stored one row per variant, with options and images as
    JSON columns and a position column preserving list order.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "product_variants"

    # ===================
    # ROW MAPPING
    # ===================

    @staticmethod
    def _row_to_variant(row: dict) -> Variant:
        return Variant(
            id=str(row["id"]),
            sku=row.get("sku") or "",
            display_name=row.get("display_name") or "",
            price=row.get("price"),
            discount=row.get("discount") or 0,
            stock=row.get("stock") or 0,
            status=row.get("status") or "active",
            images=row.get("images") or [],
            options=row.get("options") or [],
        )

    @staticmethod
    def _variant_to_row(product_id: str, variant: Variant, position: int) -> dict:
        row = {
            "product_id": product_id,
            "position": position,
            "sku": variant.sku,
            "display_name": variant.display_name,
            "price": float(variant.price) if variant.price is not None else None,
            "discount": float(variant.discount),
            "stock": variant.stock,
            "status": variant.status.value,
            "images": [image.model_dump() for image in variant.images],
            "options": [option.model_dump() for option in variant.options],
        }
        # Temporary ids are replaced by database ids on insert
        if variant.is_persisted:
            row["id"] = variant.id
        return row

    # ===================
    # READ OPERATIONS
    # ===================

    def get_variants(self, product_id: str) -> list[Variant]:
        """
        Get a product's variants in saved order.

        Args:
            product_id: Product UUID

        Returns:
            List of Variant (empty for a product without variants)
        """
        logger.debug("getting_product_variants", product_id=product_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("product_id", product_id)
                .order("position")
                .execute()
            )

            variants = [self._row_to_variant(row) for row in result.data]

            logger.info(
                "product_variants_retrieved",
                product_id=product_id,
                count=len(variants)
            )

            return variants

        except Exception as e:
            logger.error(
                "get_product_variants_failed",
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

    # ===================
    # WRITE OPERATIONS
    # ===================

    def save_variants(self, product_id: str, variants: list[Variant]) -> list[Variant]:
        """
        Replace a product's variants with the submitted list.

        Persisted variants are upserted by id and new variants are
        inserted in their own batch. Rows no longer in the list are
        deleted only after both writes succeed; a failed write leaves the
        previous variants in place.

        Args:
            product_id: Product UUID
            variants: Final variant list from the editor

        Returns:
            Saved variants with database ids, in list order

        Raises:
            VariantsRequiredError, InvalidVariantError, DuplicateSkuError,
            DuplicateCombinationError: If validation fails (nothing written)
            DatabaseError: If a write fails
        """
        logger.info("saving_product_variants", product_id=product_id, count=len(variants))

        validate_variants(variants)

        rows = [
            self._variant_to_row(product_id, variant, position)
            for position, variant in enumerate(variants)
        ]
        persisted_rows = [row for row in rows if "id" in row]
        new_rows = [row for row in rows if "id" not in row]

        operation = "select"
        try:
            existing = (
                self.db.table(self.table)
                .select("id")
                .eq("product_id", product_id)
                .execute()
            )
            previous_ids = {str(row["id"]) for row in existing.data}

            saved_rows = []
            if persisted_rows:
                operation = "upsert"
                result = self.db.table(self.table).upsert(persisted_rows).execute()
                saved_rows.extend(result.data)
            if new_rows:
                operation = "insert"
                result = self.db.table(self.table).insert(new_rows).execute()
                saved_rows.extend(result.data)

            kept_ids = {str(row["id"]) for row in saved_rows}
            stale_ids = sorted(previous_ids - kept_ids)
            if stale_ids:
                operation = "delete"
                self.db.table(self.table).delete().in_("id", stale_ids).execute()

        except Exception as e:
            logger.error(
                "save_product_variants_failed",
                product_id=product_id,
                operation=operation,
                error=str(e)
            )
            raise DatabaseError(operation, str(e))

        saved_rows.sort(key=lambda row: row.get("position", 0))
        saved = [self._row_to_variant(row) for row in saved_rows]

        logger.info(
            "product_variants_saved",
            product_id=product_id,
            count=len(saved),
            new=len(new_rows),
            removed=len(stale_ids)
        )

        return saved


# Singleton instance for convenience
_product_variant_service: Optional[ProductVariantService] = None

def get_product_variant_service() -> ProductVariantService:
    """Get or create ProductVariantService instance."""
    global _product_variant_service
    if _product_variant_service is None:
        _product_variant_service = ProductVariantService()
    return _product_variant_service
