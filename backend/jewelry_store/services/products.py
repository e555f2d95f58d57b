"""Product create/update/delete."""
from typing import Optional, Sequence

from jewelry_store.core.config import settings
from jewelry_store.core.errors import ValidationError
from jewelry_store.models.product import PRODUCT_IMAGE_SLOTS, Product
from jewelry_store.schemas.product import ProductCreate, ProductPatch
from jewelry_store.services import validation
from jewelry_store.services.catalog_writer import CatalogWriter
from jewelry_store.services.code_generator import product_prefix


def _slot_values(refs: Sequence[str]) -> dict:
    slots = list(refs) + [None] * (PRODUCT_IMAGE_SLOTS - len(refs))
    return {f"image_url{i + 1}": slots[i] for i in range(PRODUCT_IMAGE_SLOTS)}


def validate_patch_fields(patch: ProductPatch) -> dict:
    """Normalized column values for the fields actually supplied."""
    values = {}
    if patch.name is not None:
        values["name"] = validation.required_text(patch.name, "name", "Name", validation.MAX_TITLE_LENGTH)
    if patch.brand is not None:
        values["brand"] = validation.choice(patch.brand, settings.ALLOWED_BRANDS, "brand")
    if patch.type is not None:
        values["type"] = validation.choice(patch.type, settings.ALLOWED_TYPES, "type")
    if patch.material is not None:
        values["material"] = validation.choice(patch.material, settings.ALLOWED_MATERIALS, "material")
    if patch.original_price is not None:
        values["original_price"] = validation.price(patch.original_price, "originalPrice")
    if patch.sale_price is not None:
        values["sale_price"] = validation.price(patch.sale_price, "salePrice")
    if patch.description is not None:
        values["description"] = validation.optional_text(patch.description)
    return values


class ProductService(CatalogWriter):
    model = Product
    label = "Product"

    @property
    def max_images(self) -> int:
        return min(settings.MAX_PRODUCT_IMAGES, PRODUCT_IMAGE_SLOTS)

    def _validate_create(self, data: ProductCreate, image_refs: Sequence[str]) -> dict:
        for field, value in (
            ("name", data.name),
            ("brand", data.brand),
            ("type", data.type),
            ("originalPrice", data.original_price),
            ("salePrice", data.sale_price),
            ("material", data.material),
        ):
            if validation.is_missing(value):
                raise ValidationError(field, "All fields are required, including material")
        values = validate_patch_fields(ProductPatch(**data.model_dump(exclude={"main_image_index"})))
        if not image_refs:
            raise ValidationError("images", "At least one image is required")
        if len(image_refs) > self.max_images:
            raise ValidationError("images", f"Maximum {self.max_images} images allowed")
        main_index = 0 if validation.is_missing(data.main_image_index) else data.main_image_index
        values["main_image_index"] = validation.image_index(main_index, len(image_refs))
        values.update(_slot_values(image_refs))
        return values

    def create(self, data: ProductCreate, image_refs: Sequence[str]) -> Product:
        """Create a product from already-stored images.

        On any failure the images in ``image_refs`` are removed again.
        """
        try:
            values = self._validate_create(data, image_refs)
            return self._insert(product_prefix(values["type"], values["brand"]), values)
        except Exception:
            self._discard_on_failure(image_refs)
            raise

    def update(
        self,
        product_id: str,
        patch: ProductPatch,
        version: Optional[int] = None,
        new_image_refs: Sequence[str] = (),
        keep_images: bool = False,
    ) -> Product:
        """Versioned partial update.

        New images replace all current ones; without new images the current
        ones are kept only when ``keep_images`` is set, since a product
        always needs at least one image.
        """
        new_image_refs = list(new_image_refs)
        try:
            values = validate_patch_fields(patch)
            if len(new_image_refs) > self.max_images:
                raise ValidationError("images", f"Maximum {self.max_images} images allowed")
            if not new_image_refs and not keep_images:
                raise ValidationError("images", "New images are required unless keepImages is true")
            if not values and not new_image_refs and validation.is_missing(patch.main_image_index):
                raise ValidationError(None, "No valid fields to update")

            def plan(current: Product):
                superseded = []
                if new_image_refs:
                    values.update(_slot_values(new_image_refs))
                    superseded = current.image_urls
                    image_count = len(new_image_refs)
                else:
                    image_count = len(current.image_urls)
                if not validation.is_missing(patch.main_image_index):
                    values["main_image_index"] = validation.image_index(patch.main_image_index, image_count)
                elif current.main_image_index >= image_count:
                    values["main_image_index"] = 0
                return values, superseded

            return self._update(product_id.strip(), version, plan)
        except Exception:
            self._discard_on_failure(new_image_refs)
            raise
