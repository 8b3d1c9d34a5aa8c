"""
Parser settings.

Grammar constants and segment limits, built from config/parsing.yaml.
"""

from dataclasses import dataclass, field
from typing import Tuple

from ..common import constants


@dataclass(frozen=True)
class ParserSettings:
    """Every character contract and limit the descriptor parsers rely on."""
    currency_marker: str = constants.CURRENCY_MARKER
    list_separator: str = constants.LIST_SEPARATOR
    flat_price_prefix: str = constants.FLAT_PRICE_PREFIX
    pack_fragment_marker: str = constants.PACK_FRAGMENT_MARKER
    block_boundary: str = constants.BLOCK_BOUNDARY
    unit_quantifier: str = constants.UNIT_QUANTIFIER
    sentinel_descriptions: Tuple[str, ...] = field(
        default_factory=lambda: tuple(constants.SENTINEL_DESCRIPTIONS)
    )
    max_priced_segments: int = constants.MAX_PRICED_SEGMENTS
    max_plain_segments: int = constants.MAX_PLAIN_SEGMENTS
    max_pack_blocks: int = constants.MAX_PACK_BLOCKS

    def __post_init__(self):
        """Validate settings after initialization."""
        for name in ("currency_marker", "list_separator", "flat_price_prefix",
                     "pack_fragment_marker", "block_boundary", "unit_quantifier"):
            if not getattr(self, name):
                raise ValueError(f"{name} must not be empty")
        for name in ("max_priced_segments", "max_plain_segments", "max_pack_blocks"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1")

    @property
    def price_anchor(self) -> str:
        """Text that ends a description and introduces its price (": ৳")."""
        return f": {self.currency_marker}"

    @property
    def doubled_separator(self) -> str:
        return self.list_separator * 2

    def is_sentinel(self, description: str) -> bool:
        """Check if a description is a known placeholder such as "Not for sale"."""
        lowered = description.strip().lower()
        return any(lowered == s.lower() for s in self.sentinel_descriptions)

    @classmethod
    def from_dict(cls, data: dict) -> "ParserSettings":
        """
        Build settings from a parsed config mapping.

        Unknown keys are ignored; missing keys keep their defaults.
        """
        known = {name for name in cls.__dataclass_fields__}
        kwargs = {k: v for k, v in (data or {}).items() if k in known}
        if "sentinel_descriptions" in kwargs:
            kwargs["sentinel_descriptions"] = tuple(kwargs["sentinel_descriptions"] or ())
        return cls(**kwargs)
