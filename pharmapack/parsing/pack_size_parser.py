"""
Pack Size Parser

Parses the Package_Size field: one to three bracketed blocks separated
by "),(":

    "(100's pack: ৳ 100.00)"
    "(100's pack: ৳ 100.00),(150's pack: ৳ 150.00)"

Each block yields a pack count (the integer before the apostrophe) and a
pack price (the amount after the currency marker, bounded by the block's
own closing bracket).
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Tuple

from ..common.text_utils import NOT_FOUND, find_marker, parse_count, parse_money, slice_bounded
from ..models import ParserSettings
from .classifier import DescriptorClassifier

logger = logging.getLogger(__name__)


@dataclass
class PackSizeResult:
    """(count, price) pairs of one descriptor plus what was left out."""
    blocks: List[Tuple[Optional[int], Optional[Decimal]]] = field(default_factory=list)
    over_limit: int = 0
    empty_blocks: int = 0
    unparseable_counts: int = 0
    unparseable_prices: int = 0


class PackSizeParser:
    """
    Parses pack-size descriptors block by block.

    Usage:
        parser = PackSizeParser()
        result = parser.parse("(100's pack: ৳ 100.00),(150's pack: ৳ 150.00)")
        # result.blocks == [(100, Decimal("100.00")), (150, Decimal("150.00"))]
    """

    def __init__(self, settings: Optional[ParserSettings] = None):
        self.settings = settings or ParserSettings()
        self.classifier = DescriptorClassifier(self.settings)

    def split_blocks(self, text: str) -> List[str]:
        """
        Split a descriptor into block bodies without their brackets.

        Returns:
            List of block texts, e.g. ["100's pack: ৳ 100.00", ...]
        """
        s = self.settings
        body = text.strip().rstrip(s.list_separator).strip()
        boundary_open = s.block_boundary[-1]
        boundary_close = s.block_boundary[0]

        blocks = []
        for raw in body.split(s.block_boundary):
            block = raw.strip()
            if block.startswith(boundary_open):
                block = block[1:]
            if block.endswith(boundary_close):
                block = block[:-1]
            blocks.append(block.strip())
        return blocks

    def parse_block(self, block: str) -> Tuple[Optional[int], Optional[Decimal]]:
        """
        Parse one block body.

        Args:
            block: Block text without brackets, e.g. "100's pack: ৳ 100.00"

        Returns:
            (pack count, pack price); either may be None
        """
        s = self.settings

        quantifier = find_marker(block, s.unit_quantifier)
        count = None
        if quantifier != NOT_FOUND:
            count = parse_count(slice_bounded(block, 0, quantifier))

        price = None
        marker = find_marker(block, s.currency_marker)
        if marker != NOT_FOUND:
            close = find_marker(block, s.block_boundary[0], marker)
            price = parse_money(slice_bounded(block, marker + len(s.currency_marker), close))

        return count, price

    def parse(self, text: Optional[str]) -> PackSizeResult:
        """
        Parse a pack-size descriptor.

        Blocks beyond the configured limit are counted in over_limit and
        not returned.
        """
        s = self.settings
        result = PackSizeResult()
        if text is None or not text.strip():
            return result

        block_count = self.classifier.count_blocks(text)
        blocks = self.split_blocks(text)
        if block_count > s.max_pack_blocks:
            result.over_limit = block_count - s.max_pack_blocks
            logger.warning(
                "Pack-size descriptor has %d blocks (limit %d): %r",
                block_count, s.max_pack_blocks, text,
            )
            blocks = blocks[:s.max_pack_blocks]

        for block in blocks:
            count, price = self.parse_block(block)

            if count is None and price is None:
                result.empty_blocks += 1
                logger.debug("Pack-size block without count or price: %r", block)
                continue

            if count is None:
                result.unparseable_counts += 1
            if price is None:
                result.unparseable_prices += 1

            result.blocks.append((count, price))

        return result
