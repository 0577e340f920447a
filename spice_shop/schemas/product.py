from pydantic import BaseModel, ConfigDict
from typing import List


class CatalogItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    desc: str = ""
    price: str
    weight: str
    image: str = ""


class Feature(BaseModel):
    title: str
    text: str


class ProductListResponse(BaseModel):
    products: List[CatalogItem]
    total: int
