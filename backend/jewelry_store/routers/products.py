from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from jewelry_store.core.auth import get_current_admin
from jewelry_store.core.deps import get_catalog_reader, get_product_service
from jewelry_store.models.admin_user import AdminUser
from jewelry_store.routers.uploads import read_uploads
from jewelry_store.schemas.product import ProductCreate, ProductPatch, ProductResponse
from jewelry_store.services import validation
from jewelry_store.services.catalog_reader import CatalogReader
from jewelry_store.services.products import ProductService

router = APIRouter()


@router.get("", response_model=list[ProductResponse])
def list_products(
    brand: Optional[str] = None,
    type_: Optional[str] = Query(None, alias="type"),
    reader: CatalogReader = Depends(get_catalog_reader),
):
    """List products, optionally filtered by brand and/or type ("all" = no filter)."""
    return reader.list_products(brand=brand, type_=type_)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, reader: CatalogReader = Depends(get_catalog_reader)):
    return reader.get_product(product_id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    name: Optional[str] = Form(None),
    brand: Optional[str] = Form(None),
    type_: Optional[str] = Form(None, alias="type"),
    material: Optional[str] = Form(None),
    original_price: Optional[str] = Form(None, alias="originalPrice"),
    sale_price: Optional[str] = Form(None, alias="salePrice"),
    description: Optional[str] = Form(None),
    main_image_index: Optional[str] = Form(None, alias="mainImageIndex"),
    images: Optional[List[UploadFile]] = File(None),
    service: ProductService = Depends(get_product_service),
    admin: AdminUser = Depends(get_current_admin),
):
    """Add a product with 1-4 images (multipart ``images`` parts)."""
    data = ProductCreate(
        name=name,
        brand=brand,
        type=type_,
        material=material,
        original_price=original_price,
        sale_price=sale_price,
        description=description,
        main_image_index=main_image_index,
    )
    uploads = read_uploads(images, service.blob_store.max_size_bytes)
    image_refs = service.blob_store.put_many(uploads, service.max_images)
    return service.create(data, image_refs)


@router.patch("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    name: Optional[str] = Form(None),
    brand: Optional[str] = Form(None),
    type_: Optional[str] = Form(None, alias="type"),
    material: Optional[str] = Form(None),
    original_price: Optional[str] = Form(None, alias="originalPrice"),
    sale_price: Optional[str] = Form(None, alias="salePrice"),
    description: Optional[str] = Form(None),
    main_image_index: Optional[str] = Form(None, alias="mainImageIndex"),
    version: Optional[str] = Form(None),
    keep_images: Optional[str] = Form(None, alias="keepImages"),
    images: Optional[List[UploadFile]] = File(None),
    service: ProductService = Depends(get_product_service),
    admin: AdminUser = Depends(get_current_admin),
):
    """Partial update. Send ``version`` to reject edits of a stale copy (409).

    New ``images`` replace all current images; otherwise ``keepImages=true``
    is required.
    """
    patch = ProductPatch(
        name=name,
        brand=brand,
        type=type_,
        material=material,
        original_price=original_price,
        sale_price=sale_price,
        description=description,
        main_image_index=main_image_index,
    )
    expected_version = validation.expected_version(version)
    uploads = read_uploads(images, service.blob_store.max_size_bytes)
    image_refs = service.blob_store.put_many(uploads, service.max_images)
    return service.update(
        product_id,
        patch,
        version=expected_version,
        new_image_refs=image_refs,
        keep_images=validation.flag(keep_images),
    )


@router.delete("/{product_id}")
def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
    admin: AdminUser = Depends(get_current_admin),
):
    """Delete a product and its image files."""
    service.delete(product_id.strip())
    return {"ok": True, "message": "Product deleted successfully"}
