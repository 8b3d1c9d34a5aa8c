"""
Flat Price Parser

Handles the "Unit Price:" form of the container descriptor, where the
source gives a single per-unit price and no physical container:

    "Unit Price: ৳ 8.00"
    "Unit Price: ৳ 8.00,(60's pack: ৳ 480.00),"

The pack fragment belongs to the pack-size field and is ignored here.
"""

from decimal import Decimal
from typing import Optional

from ..common.text_utils import NOT_FOUND, find_marker, parse_money, slice_bounded
from ..models import ParserSettings


class FlatPriceParser:
    """Extracts the scalar unit price from a flat-price descriptor."""

    def __init__(self, settings: Optional[ParserSettings] = None):
        self.settings = settings or ParserSettings()

    def price_text(self, text: str) -> str:
        """
        Return the raw amount text between the prefix and the pack fragment.

        Args:
            text: Descriptor starting with the flat-price prefix

        Returns:
            Amount text without the currency marker, e.g. "8.00"
        """
        s = self.settings
        body = text.strip()
        start = find_marker(body, s.flat_price_prefix)
        start = 0 if start == NOT_FOUND else start + len(s.flat_price_prefix)

        end = find_marker(body, s.pack_fragment_marker, start)
        amount = slice_bounded(body, start, end)

        return amount.replace(s.currency_marker, "").strip()

    def extract(self, text: Optional[str]) -> Optional[Decimal]:
        """
        Extract the flat unit price.

        Returns:
            Price as Decimal, or None when the amount is missing or malformed
        """
        if not text:
            return None
        return parse_money(self.price_text(text))
