"""News article create/update/delete."""
from typing import Optional

from jewelry_store.core.config import settings
from jewelry_store.core.errors import ValidationError
from jewelry_store.models.news import NewsArticle
from jewelry_store.schemas.news import NewsCreate, NewsPatch
from jewelry_store.services import validation
from jewelry_store.services.catalog_writer import CatalogWriter
from jewelry_store.services.code_generator import NEWS_PREFIX


class NewsService(CatalogWriter):
    model = NewsArticle
    label = "News"

    def create(self, data: NewsCreate, image_ref: Optional[str]) -> NewsArticle:
        try:
            values = {
                "title": validation.required_text(data.title, "title", "Title", validation.MAX_TITLE_LENGTH),
                "content": validation.required_text(data.content, "content", "Content"),
            }
            if not image_ref:
                raise ValidationError("image", "An image is required")
            values["image_url"] = image_ref
            return self._insert(NEWS_PREFIX, values)
        except Exception:
            self._discard_on_failure([image_ref])
            raise

    def update(
        self,
        news_id: str,
        patch: NewsPatch,
        version: Optional[int] = None,
        new_image_ref: Optional[str] = None,
        keep_image: bool = False,
    ) -> NewsArticle:
        """Versioned partial update.

        Unlike products, an article may lose its image: no new image and
        ``keep_image`` unset clears it.
        """
        try:
            values = {}
            if patch.title is not None:
                values["title"] = validation.required_text(
                    patch.title, "title", "Title", validation.MAX_TITLE_LENGTH
                )
            if patch.content is not None:
                values["content"] = validation.required_text(patch.content, "content", "Content")
            if not values and not new_image_ref and keep_image:
                raise ValidationError(None, "No valid fields to update")

            def plan(current: NewsArticle):
                superseded = []
                if new_image_ref or not keep_image:
                    values["image_url"] = new_image_ref
                    superseded = current.image_urls
                return values, superseded

            return self._update(news_id.strip(), version, plan)
        except Exception:
            self._discard_on_failure([new_image_ref])
            raise

    @property
    def max_images(self) -> int:
        return settings.MAX_NEWS_IMAGES
