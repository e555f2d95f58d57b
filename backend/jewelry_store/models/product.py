from sqlalchemy import Column, Integer, Numeric, SmallInteger, String, Text

from jewelry_store.core.database import Base

PRODUCT_IMAGE_SLOTS = 4


class Product(Base):
    """Catalog product. ``id`` is a generated code like RC0001 (type + brand initials)."""

    __tablename__ = "products"

    id = Column(String(10), primary_key=True)
    name = Column(String(255), nullable=False)
    brand = Column(String(50), nullable=False, index=True)
    type = Column(String(50), nullable=False, index=True)
    image_url1 = Column("imageUrl1", String(255), nullable=True)
    image_url2 = Column("imageUrl2", String(255), nullable=True)
    image_url3 = Column("imageUrl3", String(255), nullable=True)
    image_url4 = Column("imageUrl4", String(255), nullable=True)
    main_image_index = Column("mainImageIndex", SmallInteger, nullable=False, default=0)
    original_price = Column("originalPrice", Numeric(10, 2), nullable=False)
    sale_price = Column("salePrice", Numeric(10, 2), nullable=False)
    material = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    version = Column(Integer, nullable=False, default=0)

    @property
    def image_slots(self) -> list:
        return [self.image_url1, self.image_url2, self.image_url3, self.image_url4]

    @property
    def image_urls(self) -> list[str]:
        """Populated slots, in slot order."""
        return [url for url in self.image_slots if url]
