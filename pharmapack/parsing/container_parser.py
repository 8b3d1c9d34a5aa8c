"""
Container Descriptor Parser

Turns a Package_Container descriptor into an ordered list of
(description, price) segments in two stages:

1. ContainerPreparer classifies the raw text, pulls out a flat price and
   rewrites orphaned fragments, producing a PreparedContainer.
2. ContainerSegmenter splits the prepared text into Segments.

The comma is both the list separator and the thousands separator, so the
currency marker is the only reliable anchor:
- one marker:  the price runs to the end of the string
               "0.2 ml syringe: ৳ 1,450.00" -> ("0.2 ml syringe", 1450.00)
- n markers:   each price runs to the next comma or the end of the string
- no markers:  split on commas, every segment has no price
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..common.text_utils import (
    NOT_FOUND,
    find_all_markers,
    find_marker,
    parse_money,
    slice_bounded,
)
from ..models import ContainerShape, ParserSettings, PreparedContainer, Segment
from .classifier import DescriptorClassifier, DescriptorGrammar
from .flat_price import FlatPriceParser
from .normalizer import FragmentNormalizer

logger = logging.getLogger(__name__)


class ContainerPreparer:
    """
    First stage: classify, extract a flat price, normalize.

    Usage:
        preparer = ContainerPreparer()
        prepared = preparer.prepare("Unit Price: ৳ 8.00,(60's pack: ৳ 480.00),")
        # prepared.shape == ContainerShape.FLAT_PRICE
        # prepared.container_size is None, prepared.unit_price == Decimal("8.00")
    """

    def __init__(self, settings: Optional[ParserSettings] = None,
                 to_fixed_point: bool = False):
        grammar = DescriptorGrammar(settings)
        self.settings = grammar.settings
        self.classifier = DescriptorClassifier(grammar=grammar)
        self.normalizer = FragmentNormalizer(grammar=grammar)
        self.flat_price = FlatPriceParser(self.settings)
        self.to_fixed_point = to_fixed_point

    def prepare(self, text: Optional[str]) -> PreparedContainer:
        """
        Prepare a raw container descriptor for segmentation.

        Args:
            text: Raw descriptor or None

        Returns:
            PreparedContainer carrying the final shape
        """
        special = self.classifier.detect_special_form(text)

        if special is ContainerShape.NULL:
            return PreparedContainer(shape=ContainerShape.NULL)

        if special is ContainerShape.FLAT_PRICE:
            return PreparedContainer(
                shape=ContainerShape.FLAT_PRICE,
                unit_price=self.flat_price.extract(text),
            )

        if special is ContainerShape.MALFORMED:
            logger.debug("Discarding malformed container descriptor: %r", text)
            return PreparedContainer(shape=ContainerShape.MALFORMED)

        normalized, rule = self.normalizer.normalize(text.strip(), self.to_fixed_point)
        shape = self.classifier.classify_segments(normalized)

        if shape is ContainerShape.NULL:
            return PreparedContainer(shape=ContainerShape.NULL, rule=rule)

        return PreparedContainer(
            shape=shape,
            container_size=normalized,
            marker_count=self.classifier.marker_count(normalized),
            rule=rule,
        )


@dataclass
class SegmentationResult:
    """Segments of one descriptor plus what was left out and why."""
    segments: List[Segment] = field(default_factory=list)
    empty_descriptions: int = 0
    over_limit: int = 0
    unparseable_prices: int = 0


class ContainerSegmenter:
    """
    Second stage: split a prepared descriptor into segments.

    Usage:
        segmenter = ContainerSegmenter()
        result = segmenter.segment(prepared)
        for seg in result.segments:
            print(seg.description, seg.price)
    """

    def __init__(self, settings: Optional[ParserSettings] = None):
        self.settings = settings or ParserSettings()

    def segment(self, prepared: PreparedContainer) -> SegmentationResult:
        """Dispatch on the prepared shape."""
        text = prepared.container_size
        shape = prepared.shape

        if shape is ContainerShape.SINGLE_PRICED:
            return self.split_single_priced(text)
        if shape is ContainerShape.MULTI_PRICED:
            return self.split_priced(text)
        if shape in (ContainerShape.MULTI_PLAIN, ContainerShape.SINGLE_PLAIN):
            return self.split_plain(text)

        # NULL, FLAT_PRICE, MALFORMED and UNKNOWN have nothing to segment
        return SegmentationResult()

    def split_single_priced(self, text: str) -> SegmentationResult:
        """
        Split a descriptor with exactly one currency marker.

        The price runs to the end of the string so a thousands separator
        is never taken for a list boundary.
        """
        s = self.settings
        result = SegmentationResult()

        anchor = find_marker(text, s.price_anchor)
        marker = find_marker(text, s.currency_marker)
        if anchor == NOT_FOUND or marker == NOT_FOUND:
            return result

        description = slice_bounded(text, 0, anchor)
        price_text = slice_bounded(text, marker + len(s.currency_marker))
        self._add(result, description, price_text)
        return result

    def split_priced(self, text: str) -> SegmentationResult:
        """
        Split a descriptor with two or more currency markers.

        For the k-th marker the description runs from the end of the
        previous segment (after its last comma) to the ": " before the
        marker, and the price from the marker to the next comma.
        """
        s = self.settings
        result = SegmentationResult()
        anchor_gap = len(s.price_anchor) - len(s.currency_marker)

        positions = find_all_markers(text, s.currency_marker)
        if len(positions) > s.max_priced_segments:
            result.over_limit = len(positions) - s.max_priced_segments
            logger.warning(
                "Container descriptor has %d priced segments (limit %d): %r",
                len(positions), s.max_priced_segments, text,
            )
            positions = positions[:s.max_priced_segments]

        previous_end = 0
        for pos in positions:
            description_end = pos - anchor_gap
            separator = text.rfind(s.list_separator, previous_end, description_end)
            description_start = previous_end if separator == NOT_FOUND else separator + 1
            description = slice_bounded(text, description_start, description_end)

            price_start = pos + len(s.currency_marker)
            price_end = find_marker(text, s.list_separator, price_start)
            price_text = slice_bounded(text, price_start, price_end)

            self._add(result, description, price_text)
            previous_end = len(text) if price_end == NOT_FOUND else price_end + 1

        return result

    def split_plain(self, text: str) -> SegmentationResult:
        """Split a descriptor without prices on the list separator."""
        s = self.settings
        result = SegmentationResult()

        parts = [p.strip() for p in text.split(s.list_separator)]
        descriptions = [p for p in parts if p]
        result.empty_descriptions = len(parts) - len(descriptions)

        if len(descriptions) > s.max_plain_segments:
            result.over_limit = len(descriptions) - s.max_plain_segments
            logger.warning(
                "Container descriptor has %d segments (limit %d): %r",
                len(descriptions), s.max_plain_segments, text,
            )
            descriptions = descriptions[:s.max_plain_segments]

        result.segments = [Segment(description=d) for d in descriptions]
        return result

    def _add(self, result: SegmentationResult, description: str, price_text: str) -> None:
        """Append a priced segment, dropping empty descriptions."""
        if not description:
            result.empty_descriptions += 1
            return

        price = parse_money(price_text)
        if price is None and price_text:
            result.unparseable_prices += 1
            logger.debug("Unparseable price %r for %r", price_text, description)

        result.segments.append(Segment(description=description, price=price))
