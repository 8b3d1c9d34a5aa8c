"""
Descriptor parsers for the medicine packaging fields.

Each parser handles one stage or one grammar:
- DescriptorClassifier: format class and marker count of a descriptor
- FragmentNormalizer: rewrite rules for orphaned fragments
- FlatPriceParser: "Unit Price:" descriptors
- ContainerPreparer / ContainerSegmenter: Package_Container segments
- PackSizeParser: Package_Size blocks
"""

from .classifier import DescriptorClassifier, DescriptorGrammar
from .container_parser import ContainerPreparer, ContainerSegmenter, SegmentationResult
from .flat_price import FlatPriceParser
from .normalizer import FragmentNormalizer, RewriteRule
from .pack_size_parser import PackSizeParser, PackSizeResult

__all__ = [
    'DescriptorGrammar',
    'DescriptorClassifier',
    'FragmentNormalizer',
    'RewriteRule',
    'FlatPriceParser',
    'ContainerPreparer',
    'ContainerSegmenter',
    'SegmentationResult',
    'PackSizeParser',
    'PackSizeResult',
]
