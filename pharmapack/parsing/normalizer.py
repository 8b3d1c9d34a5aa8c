"""
Orphan Fragment Normalizer

Removes leftovers of inconsistent upstream encoding from a container
descriptor before it is segmented. Each rule is a guard plus a pure
rewrite; rules are tried in priority order and the first one whose guard
matches is applied.

Shapes handled (P is a pack fragment such as "(60's pack: ৳ 480.00)"):
- "10 ml vial,P,,20 ml vial"        -> "10 ml vial,20 ml vial"
- "10 ml vial,480.00,P"             -> "10 ml vial"
- "10 ml vial,P"                    -> "10 ml vial"
- "10 ml vial: ৳ 50.00,P"           -> "10 ml vial: ৳ 50.00"
- "10 ml vial,480.00,20 ml vial"    -> "10 ml vial,20 ml vial"

Every rewrite is idempotent.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..models import NormalizationRule, ParserSettings
from .classifier import DescriptorGrammar

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RewriteRule:
    """A tagged rewrite: guard decides, rewrite transforms."""
    tag: NormalizationRule
    guard: Callable[[str], bool]
    rewrite: Callable[[str], str]


class FragmentNormalizer:
    """
    Applies the orphan-fragment rewrite rules to container descriptors.

    Usage:
        normalizer = FragmentNormalizer()
        text, rule = normalizer.normalize("10 ml vial,(60's pack: ৳ 480.00)")
        # text == "10 ml vial", rule == NormalizationRule.PACK_FRAGMENT
    """

    def __init__(self, settings: Optional[ParserSettings] = None,
                 grammar: Optional[DescriptorGrammar] = None):
        self.grammar = grammar or DescriptorGrammar(settings)
        self.settings = self.grammar.settings

        sep = self.grammar.sep
        fragment = self.grammar.pack_fragment.pattern
        trailing = rf"(?:\s*{sep})*\s*$"

        self._triple = re.compile(
            rf"^(?P<first>.+?){sep}\s*{fragment}\s*{sep}{sep}(?P<second>.+?){trailing}",
            re.IGNORECASE,
        )
        self._numeric_and_fragment = re.compile(
            rf"^(?P<desc>.+?){sep}\s*(?P<number>\d+(?:\.\d+)?)\s*{sep}\s*{fragment}{trailing}",
            re.IGNORECASE,
        )
        self._trailing_fragments = re.compile(
            rf"^(?P<desc>.+?)(?:{sep}\s*{fragment})+{trailing}",
            re.IGNORECASE,
        )

        self.rules: List[RewriteRule] = [
            RewriteRule(NormalizationRule.TRIPLE_CONCATENATION,
                        self._is_triple, self._rewrite_triple),
            RewriteRule(NormalizationRule.NUMERIC_AND_PACK_FRAGMENT,
                        self._is_numeric_and_fragment, self._rewrite_numeric_and_fragment),
            RewriteRule(NormalizationRule.PACK_FRAGMENT,
                        self._is_unpriced_fragment, self._rewrite_trailing_fragments),
            RewriteRule(NormalizationRule.PRICED_PACK_FRAGMENT,
                        self._is_priced_fragment, self._rewrite_trailing_fragments),
            RewriteRule(NormalizationRule.ORPHAN_NUMERIC,
                        self._is_orphan_numeric, self._rewrite_orphan_numeric),
        ]

    # ── Public API ────────────────────────────────────────────────────────────

    def match(self, text: str) -> Optional[RewriteRule]:
        """Return the first rule whose guard accepts the text."""
        for rule in self.rules:
            if rule.guard(text):
                return rule
        return None

    def normalize(self, text: Optional[str],
                  to_fixed_point: bool = False) -> Tuple[Optional[str], Optional[NormalizationRule]]:
        """
        Rewrite a container descriptor.

        Args:
            text: Descriptor (already known not to be flat-price or malformed)
            to_fixed_point: Keep applying rules until none matches

        Returns:
            (normalized text, first rule applied or None)
        """
        if text is None:
            return None, None

        first_rule = None
        # Every rewrite shortens the text, so the loop is bounded
        while True:
            rule = self.match(text)
            if rule is None:
                break

            rewritten = rule.rewrite(text)
            if rewritten == text:
                break

            logger.debug("Rule %s: %r -> %r", rule.tag.value, text, rewritten)
            text = rewritten
            if first_rule is None:
                first_rule = rule.tag
            if not to_fixed_point:
                break

        return text, first_rule

    # ── Guards ────────────────────────────────────────────────────────────────

    def _is_triple(self, text: str) -> bool:
        match = self._triple.match(text)
        if not match:
            return False
        return not (self.grammar.has_pack_fragment(match.group("first"))
                    or self.grammar.has_pack_fragment(match.group("second")))

    def _is_numeric_and_fragment(self, text: str) -> bool:
        match = self._numeric_and_fragment.match(text)
        if not match:
            return False
        return not self.grammar.has_marker_outside_fragments(text)

    def _is_unpriced_fragment(self, text: str) -> bool:
        if not self._trailing_fragments.match(text):
            return False
        return not self.grammar.has_marker_outside_fragments(text)

    def _is_priced_fragment(self, text: str) -> bool:
        if not self._trailing_fragments.match(text):
            return False
        return self.grammar.has_marker_outside_fragments(text)

    def _is_orphan_numeric(self, text: str) -> bool:
        if self.settings.currency_marker in text or self.grammar.has_pack_fragment(text):
            return False
        parts = text.split(self.settings.list_separator)
        if len(parts) != 3:
            return False
        first, middle, last = parts
        return (self.grammar.is_bare_number(middle)
                and bool(first.strip()) and not self.grammar.is_bare_number(first)
                and bool(last.strip()) and not self.grammar.is_bare_number(last))

    # ── Rewrites ──────────────────────────────────────────────────────────────

    def _join(self, *parts: str) -> str:
        return self.settings.list_separator.join(p.strip() for p in parts)

    def _rewrite_triple(self, text: str) -> str:
        match = self._triple.match(text)
        if not match:
            return text
        return self._join(match.group("first"), match.group("second"))

    def _rewrite_numeric_and_fragment(self, text: str) -> str:
        match = self._numeric_and_fragment.match(text)
        if not match:
            return text
        return match.group("desc").strip()

    def _rewrite_trailing_fragments(self, text: str) -> str:
        match = self._trailing_fragments.match(text)
        if not match:
            return text
        return match.group("desc").strip()

    def _rewrite_orphan_numeric(self, text: str) -> str:
        if not self._is_orphan_numeric(text):
            return text
        first, _, last = text.split(self.settings.list_separator)
        return self._join(first, last)
