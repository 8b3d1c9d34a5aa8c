"""
Data models for descriptor parsing.

This module contains pure data classes with no parsing logic.
"""

from .rows import (
    ContainerRow,
    ContainerShape,
    MedicineRecord,
    NormalizationRule,
    PackSizeRow,
    PackSizeShape,
    PreparedContainer,
    Segment,
)
from .settings import ParserSettings

__all__ = [
    'MedicineRecord',
    'ContainerRow',
    'PackSizeRow',
    'Segment',
    'PreparedContainer',
    'ContainerShape',
    'PackSizeShape',
    'NormalizationRule',
    'ParserSettings',
]
