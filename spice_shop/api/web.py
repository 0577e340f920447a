from fastapi import APIRouter, Request, Depends, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from pathlib import Path
import logging

from spice_shop.api.cart import build_cart_response
from spice_shop.api.contact import THANK_YOU
from spice_shop.api.dependencies import get_cart_store
from spice_shop.core.config import settings
from spice_shop.schemas.contact import ContactMessage
from spice_shop.services.cart import CartStore
from spice_shop.services.catalog import list_products, get_product, FEATURES

logger = logging.getLogger(__name__)
router = APIRouter(tags=["web"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def get_base_context(store: CartStore) -> dict:
    return {
        "shop_name": settings.SHOP_NAME,
        "whatsapp_number": settings.WHATSAPP_NUMBER,
        "whatsapp_link": "https://wa.me/" + "".join(c for c in settings.WHATSAPP_NUMBER if c.isdigit()),
        "products": list_products(),
        "features": FEATURES,
        "cart": build_cart_response(store),
    }


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, store: CartStore = Depends(get_cart_store)):
    return templates.TemplateResponse(request, "index.html", get_base_context(store))


@router.post("/cart/add")
async def add_to_cart_form(product_id: int = Form(...), store: CartStore = Depends(get_cart_store)):
    product = get_product(product_id)
    if product:
        store.add_item(product)
    else:
        logger.warning(f"Ignoring add for unknown product_id={product_id}")
    return RedirectResponse(url="/#products", status_code=303)


@router.post("/cart/{product_id}/quantity")
async def change_quantity_form(
    product_id: int,
    delta: int = Form(...),
    store: CartStore = Depends(get_cart_store)
):
    store.change_quantity(product_id, delta)
    return RedirectResponse(url="/#cart", status_code=303)


@router.post("/cart/{product_id}/remove")
async def remove_from_cart_form(product_id: int, store: CartStore = Depends(get_cart_store)):
    store.remove_item(product_id)
    return RedirectResponse(url="/#cart", status_code=303)


@router.post("/contact", response_class=HTMLResponse)
async def contact_form(
    request: Request,
    name: str = Form(...),
    phone: str = Form(...),
    email: str = Form(...),
    message: str = Form(None),
    store: CartStore = Depends(get_cart_store)
):
    context = get_base_context(store)
    try:
        submission = ContactMessage(name=name, phone=phone, email=email, message=message)
    except ValidationError:
        return templates.TemplateResponse(request, "index.html", {
            **context,
            "contact_error": "Please check your name, phone number and email address",
            "form_data": {"name": name, "phone": phone, "email": email, "message": message}
        })

    logger.info(f"Contact form submitted: name={submission.name}, email={submission.email}")
    return templates.TemplateResponse(request, "index.html", {**context, "contact_ack": THANK_YOU})
