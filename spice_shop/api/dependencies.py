from fastapi import Request

from spice_shop.services.cart import CartStore


def get_cart_store(request: Request) -> CartStore:
    """Dependency returning the application's single cart store."""
    return request.app.state.cart_store
