from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class NewsCreate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


class NewsPatch(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


class NewsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    content: str
    image_url: Optional[str] = None
    image_urls: list[str] = []
    version: int
