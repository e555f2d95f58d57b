from sqlalchemy import Column, Integer, String, Text

from jewelry_store.core.database import Base


class NewsArticle(Base):
    """News article. ``id`` is a generated code like N0001."""

    __tablename__ = "news"

    id = Column(String(10), primary_key=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    image_url = Column("imageUrl", String(255), nullable=True)
    version = Column(Integer, nullable=False, default=0)

    @property
    def image_urls(self) -> list[str]:
        return [self.image_url] if self.image_url else []
