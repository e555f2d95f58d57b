from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session, sessionmaker

from jewelry_store.core.config import settings
from jewelry_store.core.database import SessionLocal
from jewelry_store.services.blob_store import BlobStore
from jewelry_store.services.catalog_reader import CatalogReader
from jewelry_store.services.code_generator import CodeGenerator
from jewelry_store.services.news import NewsService
from jewelry_store.services.products import ProductService


def get_session_factory() -> sessionmaker:
    return SessionLocal


def get_db(session_factory: sessionmaker = Depends(get_session_factory)) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


def get_blob_store() -> BlobStore:
    return BlobStore(settings.UPLOAD_DIR, settings.UPLOAD_URL_PREFIX, settings.IMAGE_MAX_SIZE_BYTES)


def get_code_generator() -> CodeGenerator:
    return CodeGenerator(settings.CODE_GENERATION_MAX_ATTEMPTS)


def get_product_service(
    session_factory: sessionmaker = Depends(get_session_factory),
    blob_store: BlobStore = Depends(get_blob_store),
    code_generator: CodeGenerator = Depends(get_code_generator),
) -> ProductService:
    return ProductService(session_factory, blob_store, code_generator)


def get_news_service(
    session_factory: sessionmaker = Depends(get_session_factory),
    blob_store: BlobStore = Depends(get_blob_store),
    code_generator: CodeGenerator = Depends(get_code_generator),
) -> NewsService:
    return NewsService(session_factory, blob_store, code_generator)


def get_catalog_reader(session_factory: sessionmaker = Depends(get_session_factory)) -> CatalogReader:
    return CatalogReader(session_factory)
