"""
Row Materializer

Runs the container and pack-size pipelines over every medicine record and
accumulates the two child row sets.

Every run is a full refresh: rows are built from empty, nothing is
carried over from a previous run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..models import (
    ContainerRow,
    ContainerShape,
    MedicineRecord,
    PackSizeRow,
    PackSizeShape,
    ParserSettings,
    PreparedContainer,
)
from ..parsing import (
    ContainerPreparer,
    ContainerSegmenter,
    DescriptorClassifier,
    PackSizeParser,
    PackSizeResult,
    SegmentationResult,
)
from ..validation import ParseSummary

logger = logging.getLogger(__name__)


@dataclass
class MaterializeResult:
    """Both child row sets and the run's verification summary."""
    container_rows: List[ContainerRow] = field(default_factory=list)
    pack_size_rows: List[PackSizeRow] = field(default_factory=list)
    summary: ParseSummary = field(default_factory=ParseSummary)


class RowMaterializer:
    """
    Builds Medicine_PackageContainer and Medicine_PackageSize rows.

    Usage:
        materializer = RowMaterializer(load_parser_settings())
        result = materializer.materialize(records)
        result.summary.print_final_report()
    """

    def __init__(self, settings: Optional[ParserSettings] = None, to_fixed_point: bool = False):
        self.settings = settings or ParserSettings()
        self.preparer = ContainerPreparer(self.settings, to_fixed_point=to_fixed_point)
        self.segmenter = ContainerSegmenter(self.settings)
        self.classifier = DescriptorClassifier(self.settings)
        self.pack_parser = PackSizeParser(self.settings)

    def container_rows(self, brand_id: int,
                       prepared: PreparedContainer,
                       segmentation: SegmentationResult) -> List[ContainerRow]:
        """Rows for one container descriptor."""
        if prepared.shape is ContainerShape.FLAT_PRICE:
            if prepared.unit_price is None:
                return []
            return [ContainerRow(brand_id, None, prepared.unit_price)]

        return [
            ContainerRow(brand_id, seg.description, seg.price)
            for seg in segmentation.segments
        ]

    def pack_size_rows(self, brand_id: int, result: PackSizeResult) -> List[PackSizeRow]:
        """Rows for one pack-size descriptor."""
        return [PackSizeRow(brand_id, count, price) for count, price in result.blocks]

    def process(self, record: MedicineRecord, summary: ParseSummary) -> tuple:
        """
        Parse both descriptors of one record.

        Returns:
            (container rows, pack-size rows)
        """
        prepared = self.preparer.prepare(record.container_descriptor)
        segmentation = self.segmenter.segment(prepared)
        containers = self.container_rows(record.brand_id, prepared, segmentation)

        pack_shape = self.classifier.classify_pack_size(record.pack_size_descriptor)
        if pack_shape is PackSizeShape.BLOCKS:
            pack_result = self.pack_parser.parse(record.pack_size_descriptor)
        else:
            pack_result = PackSizeResult()
        packs = self.pack_size_rows(record.brand_id, pack_result)

        if prepared.shape is ContainerShape.UNKNOWN:
            logger.warning("Brand %s: unclassified container descriptor %r",
                           record.brand_id, record.container_descriptor)
        if pack_shape is PackSizeShape.UNKNOWN:
            logger.warning("Brand %s: unclassified pack-size descriptor %r",
                           record.brand_id, record.pack_size_descriptor)

        summary.record(record, prepared, segmentation, pack_shape, pack_result,
                       containers, packs)
        return containers, packs

    def materialize(self, records: Iterable[MedicineRecord]) -> MaterializeResult:
        """
        Build both child row sets from scratch.

        Args:
            records: Medicine records from the brand loader

        Returns:
            MaterializeResult with rows in record order
        """
        result = MaterializeResult(summary=ParseSummary(self.settings))

        for record in records:
            containers, packs = self.process(record, result.summary)
            result.container_rows.extend(containers)
            result.pack_size_rows.extend(packs)

        summary = result.summary
        logger.info(
            "Materialized %d container rows and %d pack-size rows from %d records "
            "(%d in neither table)",
            summary.container_rows, summary.pack_size_rows,
            summary.records, summary.records_without_rows,
        )
        return result


def materialize(records: Iterable[MedicineRecord],
                settings: Optional[ParserSettings] = None) -> MaterializeResult:
    """Convenience wrapper: one full-refresh pass with the given settings."""
    return RowMaterializer(settings).materialize(records)
