from jewelry_store.core.database import Base
from jewelry_store.models.admin_user import AdminUser
from jewelry_store.models.code_sequence import CodeSequence
from jewelry_store.models.news import NewsArticle
from jewelry_store.models.product import Product

__all__ = [
    "Base",
    "AdminUser",
    "CodeSequence",
    "NewsArticle",
    "Product",
]
