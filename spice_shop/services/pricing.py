import logging
import re
from decimal import Decimal

logger = logging.getLogger(__name__)

CURRENCY_SYMBOL = "₹"

# Currency prefix (anything up to the first digit), then the amount
_PRICE = re.compile(r"\D*(\d[\d,]*(?:\.\d+)?)\s*")


def parse_price(value: str) -> Decimal:
    """
    Parse a display price such as "₹150" or "Rs. 1,250" into its numeric magnitude.
    The currency prefix is dropped and thousands separators are removed.
    Returns Decimal("0") when the rest is not a plain amount; never raises.
    """
    match = _PRICE.fullmatch(value or "")
    if not match:
        logger.warning(f"Unparsable price {value!r}, counting it as 0")
        return Decimal("0")

    return Decimal(match.group(1).replace(",", ""))


def format_price(amount: Decimal) -> str:
    return f"{CURRENCY_SYMBOL}{amount}"
