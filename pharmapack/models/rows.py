"""
Row data models.

Pure data classes for the parent medicine record, the two child row sets and
the intermediate values passed between parsing stages.
No parsing logic - only data structure definitions.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class ContainerShape(Enum):
    """Format class of a container descriptor."""
    NULL = "null"
    FLAT_PRICE = "flat_price"        # "Unit Price: ৳ 8.00"
    MALFORMED = "malformed"          # doubled separator, discarded
    SINGLE_PLAIN = "single_plain"    # "75 µg pre-filled syringe"
    MULTI_PLAIN = "multi_plain"      # "10 gm tube,15 gm tube"
    SINGLE_PRICED = "single_priced"  # "100 ml bottle: ৳ 130.00"
    MULTI_PRICED = "multi_priced"    # "37.5 ml bottle: ৳ 130.00,50 ml bottle: ৳ 160.00"
    UNKNOWN = "unknown"


class PackSizeShape(Enum):
    """Format class of a pack-size descriptor."""
    NULL = "null"
    BLOCKS = "blocks"
    UNKNOWN = "unknown"


class NormalizationRule(Enum):
    """Rewrite rules for orphaned fragments, in priority order."""
    TRIPLE_CONCATENATION = "triple_concatenation"
    NUMERIC_AND_PACK_FRAGMENT = "numeric_and_pack_fragment"
    PACK_FRAGMENT = "pack_fragment"
    PRICED_PACK_FRAGMENT = "priced_pack_fragment"
    ORPHAN_NUMERIC = "orphan_numeric"


@dataclass(frozen=True)
class MedicineRecord:
    """Parent record as supplied by the brand loader."""
    brand_id: int
    container_descriptor: Optional[str] = None
    pack_size_descriptor: Optional[str] = None

    @property
    def has_data(self) -> bool:
        return self.container_descriptor is not None or self.pack_size_descriptor is not None


@dataclass(frozen=True)
class Segment:
    """One (description, price) pair of a container descriptor."""
    description: str
    price: Optional[Decimal] = None


@dataclass(frozen=True)
class PreparedContainer:
    """
    Container descriptor after classification and clean-up.

    container_size is the normalized descriptor still to be segmented
    (None for flat-price, malformed and null fields); unit_price is the
    flat price pulled out of a flat-price descriptor.
    """
    shape: ContainerShape
    container_size: Optional[str] = None
    unit_price: Optional[Decimal] = None
    marker_count: int = 0
    rule: Optional[NormalizationRule] = None


@dataclass(frozen=True)
class ContainerRow:
    """One physical container variant and its per-unit price."""
    brand_id: int
    container_size: Optional[str]
    unit_price: Optional[Decimal]

    def __post_init__(self):
        if self.container_size is None and self.unit_price is None:
            raise ValueError("ContainerRow needs a container size or a unit price")

    def as_dict(self) -> dict:
        return {
            "Brand_ID": self.brand_id,
            "Container_Size": self.container_size or "",
            "Unit_Price": "" if self.unit_price is None else str(self.unit_price),
        }


@dataclass(frozen=True)
class PackSizeRow:
    """One "N-unit pack" pricing tier."""
    brand_id: int
    pack_count: Optional[int]
    pack_price: Optional[Decimal]

    def __post_init__(self):
        if self.pack_count is None and self.pack_price is None:
            raise ValueError("PackSizeRow needs a pack count or a pack price")

    def as_dict(self) -> dict:
        return {
            "Brand_ID": self.brand_id,
            "Pack_Size": "" if self.pack_count is None else str(self.pack_count),
            "Pack_Price": "" if self.pack_price is None else str(self.pack_price),
        }
