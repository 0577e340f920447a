from typing import List, Optional

from spice_shop.schemas.product import CatalogItem, Feature

IMAGE_BASE_URL = "https://storage.googleapis.com/ai-studio-assets/ddk-spices"

PRODUCTS: List[CatalogItem] = [
    CatalogItem(id=1, name="Lal Mirch Powder", desc="Taaza aur tez lal mirch", price="₹150", weight="500g",
                image=f"{IMAGE_BASE_URL}/red-chilli.png"),
    CatalogItem(id=2, name="Haldi Powder", desc="Pure aur khoobsurat haldi", price="₹120", weight="500g",
                image=f"{IMAGE_BASE_URL}/turmeric.png"),
    CatalogItem(id=3, name="Cinnamon Powder", desc="Khushbudaar dalchini", price="₹180", weight="500g",
                image=f"{IMAGE_BASE_URL}/cinnamon.png"),
    CatalogItem(id=4, name="Black Lemon Powder", desc="Unique aur chatpata", price="₹220", weight="500g",
                image=f"{IMAGE_BASE_URL}/black-lemon.png"),
    CatalogItem(id=5, name="Garam Masala", desc="Special recipe garam masala", price="₹250", weight="500g",
                image=f"{IMAGE_BASE_URL}/garam-masala.png"),
    CatalogItem(id=6, name="Sabji Masala", desc="Har sabji perfect banaye", price="₹140", weight="500g",
                image=f"{IMAGE_BASE_URL}/sabji-masala.png"),
]

FEATURES: List[Feature] = [
    Feature(title="100% Natural", text="Koi chemicals nahi, sirf natural masale"),
    Feature(title="Premium Quality", text="Sabse best quality, har packet mein"),
    Feature(title="Best Price", text="Quality ke saath reasonable rates"),
    Feature(title="Fast Delivery", text="Ghar tak delivery, jaldi aur free"),
]


def list_products() -> List[CatalogItem]:
    """Catalog in display order."""
    return list(PRODUCTS)


def get_product(product_id: int) -> Optional[CatalogItem]:
    return next((p for p in PRODUCTS if p.id == product_id), None)
