from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from jewelry_store.core.auth import get_current_admin
from jewelry_store.core.deps import get_catalog_reader, get_news_service
from jewelry_store.models.admin_user import AdminUser
from jewelry_store.routers.uploads import read_uploads
from jewelry_store.schemas.news import NewsCreate, NewsPatch, NewsResponse
from jewelry_store.services import validation
from jewelry_store.services.catalog_reader import CatalogReader
from jewelry_store.services.news import NewsService

router = APIRouter()


@router.get("", response_model=list[NewsResponse])
def list_news(reader: CatalogReader = Depends(get_catalog_reader)):
    return reader.list_news()


@router.get("/{news_id}", response_model=NewsResponse)
def get_news(news_id: str, reader: CatalogReader = Depends(get_catalog_reader)):
    return reader.get_news(news_id)


@router.post("", response_model=NewsResponse, status_code=status.HTTP_201_CREATED)
def create_news(
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    image: UploadFile = File(None),
    service: NewsService = Depends(get_news_service),
    admin: AdminUser = Depends(get_current_admin),
):
    uploads = read_uploads([image], service.blob_store.max_size_bytes)
    refs = service.blob_store.put_many(uploads, service.max_images, field="image")
    return service.create(NewsCreate(title=title, content=content), refs[0] if refs else None)


@router.patch("/{news_id}", response_model=NewsResponse)
def update_news(
    news_id: str,
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    version: Optional[str] = Form(None),
    keep_image: Optional[str] = Form(None, alias="keepImage"),
    image: UploadFile = File(None),
    service: NewsService = Depends(get_news_service),
    admin: AdminUser = Depends(get_current_admin),
):
    """Partial update. Without a new ``image`` and without ``keepImage=true`` the image is removed."""
    expected_version = validation.expected_version(version)
    uploads = read_uploads([image], service.blob_store.max_size_bytes)
    refs = service.blob_store.put_many(uploads, service.max_images, field="image")
    return service.update(
        news_id,
        NewsPatch(title=title, content=content),
        version=expected_version,
        new_image_ref=refs[0] if refs else None,
        keep_image=validation.flag(keep_image),
    )


@router.delete("/{news_id}")
def delete_news(
    news_id: str,
    service: NewsService = Depends(get_news_service),
    admin: AdminUser = Depends(get_current_admin),
):
    service.delete(news_id.strip())
    return {"ok": True, "message": "News deleted successfully"}
