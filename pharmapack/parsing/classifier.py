"""
Descriptor Classifier

Decides which grammar class a raw descriptor belongs to before any
rewriting or segmentation happens.

Container descriptors come in these shapes:
- "100 ml bottle: ৳ 130.00"                                  (single, priced)
- "37.5 ml bottle: ৳ 130.00,50 ml bottle: ৳ 160.00"          (multiple, priced)
- "10 gm tube,15 gm tube"                                    (multiple, no price)
- "75 µg pre-filled syringe"                                 (single, no price)
- "Unit Price: ৳ 8.00,(60's pack: ৳ 480.00),"                (flat price)

Pack-size descriptors are 1-3 bracketed blocks:
- "(100's pack: ৳ 100.00),(150's pack: ৳ 150.00)"
"""

import re
from typing import Optional

from ..common.text_utils import count_marker
from ..models import ContainerShape, PackSizeShape, ParserSettings


class DescriptorGrammar:
    """
    Compiled patterns shared by the classifier and the normalizer.

    Built once per ParserSettings so a custom marker or separator flows
    into every regex.
    """

    def __init__(self, settings: Optional[ParserSettings] = None):
        self.settings = settings or ParserSettings()
        s = self.settings

        sep = re.escape(s.list_separator)
        self.sep = sep

        # "(60's pack: ৳ 480.00)" or a bare "(60's pack)"
        self.pack_fragment = re.compile(
            rf"\(\s*\d+\s*{re.escape(s.unit_quantifier)}s\s+pack[^)]*\)",
            re.IGNORECASE,
        )

        self.doubled_separator = re.compile(re.escape(s.doubled_separator))
        # A pack fragment ending right where a ",," starts
        self.trailing_pack_fragment = re.compile(
            rf"{self.pack_fragment.pattern}\s*$", re.IGNORECASE
        )

        # Price with no currency marker in front of it: "480.00"
        self.bare_number = re.compile(r"^\s*\d+(?:\.\d+)?\s*$")

    def strip_pack_fragments(self, text: str) -> str:
        """Remove every pack fragment (used to look for markers outside them)."""
        return self.pack_fragment.sub("", text)

    def has_pack_fragment(self, text: str) -> bool:
        return bool(self.pack_fragment.search(text))

    def has_marker_outside_fragments(self, text: str) -> bool:
        return self.settings.currency_marker in self.strip_pack_fragments(text)

    def is_bare_number(self, text: str) -> bool:
        return bool(self.bare_number.match(text))

    def has_malformed_separator(self, text: str) -> bool:
        """
        Check for a ",," that does not directly follow a pack fragment.

        "a,(60's pack: ৳ 480.00),,b" is the triple-concatenation shape;
        any other doubled separator is a glued dual block.
        """
        for match in self.doubled_separator.finditer(text):
            if not self.trailing_pack_fragment.search(text, 0, match.start()):
                return True
        return False


class DescriptorClassifier:
    """
    Classifies container and pack-size descriptors.

    Usage:
        classifier = DescriptorClassifier()
        form = classifier.detect_special_form(raw)   # NULL / FLAT_PRICE / MALFORMED / None
        shape = classifier.classify_segments(text)   # after normalization
    """

    def __init__(self, settings: Optional[ParserSettings] = None,
                 grammar: Optional[DescriptorGrammar] = None):
        self.grammar = grammar or DescriptorGrammar(settings)
        self.settings = self.grammar.settings

    def marker_count(self, text: Optional[str]) -> int:
        """Number of currency markers in the text."""
        return count_marker(text, self.settings.currency_marker)

    def is_flat_price(self, text: str) -> bool:
        return text.lstrip().startswith(self.settings.flat_price_prefix)

    def is_malformed(self, text: str) -> bool:
        return self.grammar.has_malformed_separator(text)

    def detect_special_form(self, text: Optional[str]) -> Optional[ContainerShape]:
        """
        Check the shapes that bypass normalization, first match wins.

        Returns:
            ContainerShape.NULL, FLAT_PRICE or MALFORMED, or None when the
            descriptor should go through the normalizer and segmenter
        """
        if text is None or not text.strip():
            return ContainerShape.NULL
        if self.is_flat_price(text):
            return ContainerShape.FLAT_PRICE
        if self.is_malformed(text):
            return ContainerShape.MALFORMED
        return None

    def classify_segments(self, text: Optional[str]) -> ContainerShape:
        """
        Classify a normalized container descriptor by marker and separator count.

        Leftover pack fragments, a misplaced flat-price prefix or a marker
        without its ": ৳" anchor make the descriptor UNKNOWN.
        """
        if text is None or not text.strip():
            return ContainerShape.NULL

        s = self.settings
        if self.grammar.has_pack_fragment(text) or s.flat_price_prefix in text:
            return ContainerShape.UNKNOWN

        markers = self.marker_count(text)
        if markers == 0:
            if s.list_separator in text:
                return ContainerShape.MULTI_PLAIN
            return ContainerShape.SINGLE_PLAIN

        if count_marker(text, s.price_anchor) != markers:
            return ContainerShape.UNKNOWN
        if markers == 1:
            return ContainerShape.SINGLE_PRICED
        return ContainerShape.MULTI_PRICED

    def count_blocks(self, text: Optional[str]) -> int:
        """Number of pack-size blocks (block boundaries + 1)."""
        if text is None or not text.strip():
            return 0
        return count_marker(text, self.settings.block_boundary) + 1

    def classify_pack_size(self, text: Optional[str]) -> PackSizeShape:
        """
        Classify a pack-size descriptor.

        A valid descriptor starts with "(" and ends with ")", ignoring
        trailing separators.
        """
        if text is None or not text.strip():
            return PackSizeShape.NULL

        body = text.strip().rstrip(self.settings.list_separator).strip()
        if body.startswith("(") and body.endswith(")"):
            return PackSizeShape.BLOCKS
        return PackSizeShape.UNKNOWN
