"""Read-only queries over products and news."""
import logging
from typing import Optional, Sequence

from sqlalchemy import func
from sqlalchemy.orm import sessionmaker

from jewelry_store.core.config import settings
from jewelry_store.core.errors import InvalidFilterError, NotFoundError
from jewelry_store.models.news import NewsArticle
from jewelry_store.models.product import Product

logger = logging.getLogger(__name__)

ALL = "all"


def _filter_value(value: Optional[str], allowed: Sequence[str], field: str) -> Optional[str]:
    """Lowercased filter value, or None when unfiltered (absent or "all")."""
    if value is None or not value.strip() or value.strip().lower() == ALL:
        return None
    wanted = value.strip().lower()
    if wanted not in {a.lower() for a in allowed}:
        raise InvalidFilterError(field, f'Invalid {field}: "{value}". Must be one of: {", ".join(allowed)}')
    return wanted


class CatalogReader:
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def list_products(self, brand: Optional[str] = None, type_: Optional[str] = None) -> list[Product]:
        brand_filter = _filter_value(brand, settings.ALLOWED_BRANDS, "brand")
        type_filter = _filter_value(type_, settings.ALLOWED_TYPES, "type")
        db = self.session_factory()
        try:
            query = db.query(Product)
            if brand_filter:
                query = query.filter(func.lower(Product.brand) == brand_filter)
            if type_filter:
                query = query.filter(func.lower(Product.type) == type_filter)
            products = query.order_by(Product.id).all()
        finally:
            db.close()
        logger.debug("Returning %d products", len(products))
        return products

    def get_product(self, product_id: str) -> Product:
        db = self.session_factory()
        try:
            product = db.get(Product, product_id.strip())
        finally:
            db.close()
        if product is None:
            raise NotFoundError(f"Product with ID {product_id} not found")
        return product

    def list_news(self) -> list[NewsArticle]:
        db = self.session_factory()
        try:
            # Newest first; ids grow with creation order
            return db.query(NewsArticle).order_by(NewsArticle.id.desc()).all()
        finally:
            db.close()

    def get_news(self, news_id: str) -> NewsArticle:
        db = self.session_factory()
        try:
            article = db.get(NewsArticle, news_id.strip())
        finally:
            db.close()
        if article is None:
            raise NotFoundError(f"News with ID {news_id} not found")
        return article
