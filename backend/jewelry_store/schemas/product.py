from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Form fields arrive as strings; direct callers may pass numbers
Number = Union[Decimal, int, float, str]


class ProductCreate(BaseModel):
    name: Optional[str] = None
    brand: Optional[str] = None
    type: Optional[str] = None
    material: Optional[str] = None
    original_price: Optional[Number] = None
    sale_price: Optional[Number] = None
    description: Optional[str] = None
    main_image_index: Optional[Union[int, str]] = None


class ProductPatch(BaseModel):
    """Partial update; None means leave the field untouched."""

    name: Optional[str] = None
    brand: Optional[str] = None
    type: Optional[str] = None
    material: Optional[str] = None
    original_price: Optional[Number] = None
    sale_price: Optional[Number] = None
    description: Optional[str] = None
    main_image_index: Optional[Union[int, str]] = None


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    brand: str
    type: str
    image_url1: Optional[str] = None
    image_url2: Optional[str] = None
    image_url3: Optional[str] = None
    image_url4: Optional[str] = None
    image_urls: list[str] = []
    main_image_index: int = 0
    original_price: float
    sale_price: float
    material: str
    description: Optional[str] = None
    version: int
