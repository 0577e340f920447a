from fastapi import APIRouter, HTTPException

from spice_shop.schemas.product import CatalogItem, ProductListResponse
from spice_shop.services.catalog import list_products, get_product

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=ProductListResponse)
async def list_catalog():
    products = list_products()
    return ProductListResponse(products=products, total=len(products))


@router.get("/{product_id}", response_model=CatalogItem)
async def get_catalog_item(product_id: int):
    product = get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
