import logging
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from pydantic import TypeAdapter

from spice_shop.db.storage import KeyValueStorage, StorageError
from spice_shop.schemas.cart import CartLine, CartTotals
from spice_shop.schemas.product import CatalogItem
from spice_shop.services.feedback import AddedSignal

logger = logging.getLogger(__name__)

DEFAULT_CART_KEY = "ddk_cart"

_lines_adapter = TypeAdapter(List[CartLine])


class CartDecodeError(ValueError):
    """Persisted cart bytes are malformed or not a cart."""


def encode_cart(lines: Sequence[CartLine]) -> bytes:
    return _lines_adapter.dump_json(list(lines))


def decode_cart(raw: bytes) -> List[CartLine]:
    """Parse persisted bytes into cart lines, rejecting anything that breaks cart invariants."""
    try:
        lines = _lines_adapter.validate_json(raw)
    except ValueError as e:
        raise CartDecodeError(str(e)) from e

    seen = set()
    for line in lines:
        if line.id in seen:
            raise CartDecodeError(f"Duplicate cart line for product_id={line.id}")
        seen.add(line.id)

    return lines


class CartStore:
    """
    Sole owner of the visitor's cart.

    Every mutation updates the in-memory lines first and then writes the
    whole cart to storage. Storage failures are logged; the in-memory
    cart stays authoritative for the rest of the session.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = DEFAULT_CART_KEY,
        feedback_seconds: float = 2.0,
    ):
        self.storage = storage
        self.key = key
        self.added = AddedSignal(feedback_seconds)
        self._lines: List[CartLine] = []

    def initialize(self) -> None:
        """Load the persisted cart once. Missing or corrupt data leaves the cart empty."""
        self._lines = []

        try:
            raw = self.storage.read(self.key)
        except StorageError as e:
            logger.error(f"Failed to read persisted cart: {str(e)}")
            return

        if raw is None:
            logger.info("No persisted cart, starting empty")
            return

        try:
            self._lines = decode_cart(raw)
        except CartDecodeError as e:
            logger.warning(f"Discarding unparsable persisted cart: {str(e)}")
            return

        logger.info(f"Loaded cart with {len(self._lines)} lines")

    @property
    def lines(self) -> Tuple[CartLine, ...]:
        return tuple(self._lines)

    @property
    def just_added_id(self) -> Optional[int]:
        return self.added.current

    def get_line(self, product_id: int) -> Optional[CartLine]:
        return next((line for line in self._lines if line.id == product_id), None)

    def add_item(self, product: CatalogItem) -> None:
        """Add one unit of a catalog product, creating its line on first add."""
        existing = self.get_line(product.id)

        if existing:
            self._lines = [
                line.model_copy(update={"quantity": line.quantity + 1}) if line.id == product.id else line
                for line in self._lines
            ]
        else:
            # name, price and weight are captured now and never refreshed from the catalog
            self._lines = self._lines + [CartLine(
                id=product.id,
                name=product.name,
                price=product.price,
                weight=product.weight,
                quantity=1
            )]

        logger.info(f"Added to cart: product_id={product.id}")
        self.added.trigger(product.id)
        self._persist()

    def change_quantity(self, product_id: int, delta: int) -> None:
        """Shift a line's quantity by delta, never below 1. Unknown ids are ignored."""
        self._lines = [
            line.model_copy(update={"quantity": max(1, line.quantity + delta)}) if line.id == product_id else line
            for line in self._lines
        ]
        logger.info(f"Changed cart quantity: product_id={product_id}, delta={delta}")
        self._persist()

    def remove_item(self, product_id: int) -> None:
        self._lines = [line for line in self._lines if line.id != product_id]
        logger.info(f"Removed from cart: product_id={product_id}")
        self._persist()

    def totals(self) -> CartTotals:
        item_count = sum(line.quantity for line in self._lines)
        amount = sum((line.subtotal for line in self._lines), Decimal("0"))
        return CartTotals(item_count=item_count, amount=amount)

    def close(self) -> None:
        self.added.clear()

    def _persist(self) -> None:
        try:
            self.storage.write(self.key, encode_cart(self._lines))
        except StorageError as e:
            logger.error(f"Failed to persist cart: {str(e)}")
