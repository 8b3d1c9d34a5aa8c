"""
ParseSummary

Tracks data quality counters across a materializer run and prints the
verification report.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Optional

from ..models import ContainerShape, PackSizeShape, ParserSettings

if TYPE_CHECKING:
    from ..models import ContainerRow, MedicineRecord, PackSizeRow, PreparedContainer
    from ..parsing import PackSizeResult, SegmentationResult

# How many example brand ids to keep per issue
_SAMPLE_SIZE = 5

# Container shapes that legitimately leave a record with data but no rows
_EXPLAINED_EMPTY = (ContainerShape.MALFORMED, ContainerShape.FLAT_PRICE)


class ParseSummary:
    """
    Aggregate counters for one pass over the medicine records.

    Parse issues never stop the batch; they end up here and surface as
    discrepancies between records with data and rows produced.

    Usage::

        summary = ParseSummary()
        # inside the materializer loop:
        summary.record(record, prepared, segmentation, pack_shape, pack_result,
                       container_rows, pack_rows)
        # after the loop:
        summary.print_final_report()
        if summary.has_discrepancies():
            sys.exit(1)
    """

    def __init__(self, settings: Optional[ParserSettings] = None) -> None:
        self.settings = settings or ParserSettings()

        self.records: int = 0
        self.records_with_data: int = 0
        self.records_without_data: int = 0

        # Records that ended up in neither child set
        self.records_without_rows: int = 0
        # ... of which had raw data but nothing parseable
        self.unexplained_empty: list[int] = []
        self.explained_empty: list[int] = []

        self.container_rows: int = 0
        self.pack_size_rows: int = 0
        self.null_unit_price: int = 0
        self.null_container_size: int = 0
        self.null_pack_count: int = 0
        self.null_pack_price: int = 0
        self.container_brand_ids: set[int] = set()
        self.pack_size_brand_ids: set[int] = set()

        # Shape and rule tallies: value -> count
        self.container_shapes: dict[str, int] = defaultdict(int)
        self.pack_size_shapes: dict[str, int] = defaultdict(int)
        self.rules_applied: dict[str, int] = defaultdict(int)

        # Issue counters
        self.unparseable_prices: int = 0
        self.unparseable_counts: int = 0
        self.unresolved_flat_prices: int = 0
        self.malformed_discards: int = 0
        self.unknown_shapes: int = 0
        self.unknown_brand_ids: list[int] = []
        self.segments_over_limit: int = 0
        self.blocks_over_limit: int = 0
        self.empty_descriptions: int = 0
        self.empty_blocks: int = 0
        self.sentinel_rows: int = 0

    # ── Public API ────────────────────────────────────────────────────────────

    def record(
        self,
        record: "MedicineRecord",
        prepared: "PreparedContainer",
        segmentation: "SegmentationResult",
        pack_shape: PackSizeShape,
        pack_result: "PackSizeResult",
        container_rows: list["ContainerRow"],
        pack_rows: list["PackSizeRow"],
    ) -> None:
        """Record one medicine record's parse outcome and emitted rows."""
        self.records += 1
        if record.has_data:
            self.records_with_data += 1
        else:
            self.records_without_data += 1

        # Container pipeline
        self.container_shapes[prepared.shape.value] += 1
        if prepared.rule is not None:
            self.rules_applied[prepared.rule.value] += 1
        if prepared.shape is ContainerShape.MALFORMED:
            self.malformed_discards += 1
        if prepared.shape is ContainerShape.UNKNOWN:
            self._count_unknown(record.brand_id)
        if prepared.shape is ContainerShape.FLAT_PRICE and prepared.unit_price is None:
            self.unresolved_flat_prices += 1

        self.unparseable_prices += segmentation.unparseable_prices
        self.segments_over_limit += segmentation.over_limit
        self.empty_descriptions += segmentation.empty_descriptions

        # Pack-size pipeline
        self.pack_size_shapes[pack_shape.value] += 1
        if pack_shape is PackSizeShape.UNKNOWN:
            self._count_unknown(record.brand_id)
        self.unparseable_prices += pack_result.unparseable_prices
        self.unparseable_counts += pack_result.unparseable_counts
        self.blocks_over_limit += pack_result.over_limit
        self.empty_blocks += pack_result.empty_blocks

        # Rows
        for row in container_rows:
            self.container_rows += 1
            self.container_brand_ids.add(row.brand_id)
            if row.unit_price is None:
                self.null_unit_price += 1
            if row.container_size is None:
                self.null_container_size += 1
            elif self.settings.is_sentinel(row.container_size):
                self.sentinel_rows += 1

        for row in pack_rows:
            self.pack_size_rows += 1
            self.pack_size_brand_ids.add(row.brand_id)
            if row.pack_count is None:
                self.null_pack_count += 1
            if row.pack_price is None:
                self.null_pack_price += 1

        if not container_rows and not pack_rows:
            self.records_without_rows += 1
            if record.has_data:
                explained = (prepared.shape in _EXPLAINED_EMPTY
                             and pack_shape is PackSizeShape.NULL)
                target = self.explained_empty if explained else self.unexplained_empty
                target.append(record.brand_id)

    @property
    def total_rows(self) -> int:
        return self.container_rows + self.pack_size_rows

    def as_dict(self) -> dict:
        """Counters as a plain dict (for logging or JSON output)."""
        return {
            "records": self.records,
            "records_with_data": self.records_with_data,
            "records_without_data": self.records_without_data,
            "records_without_rows": self.records_without_rows,
            "container_rows": self.container_rows,
            "pack_size_rows": self.pack_size_rows,
            "null_unit_price": self.null_unit_price,
            "null_container_size": self.null_container_size,
            "null_pack_count": self.null_pack_count,
            "null_pack_price": self.null_pack_price,
            "container_brand_ids": len(self.container_brand_ids),
            "pack_size_brand_ids": len(self.pack_size_brand_ids),
            "unparseable_prices": self.unparseable_prices,
            "unparseable_counts": self.unparseable_counts,
            "unresolved_flat_prices": self.unresolved_flat_prices,
            "malformed_discards": self.malformed_discards,
            "unknown_shapes": self.unknown_shapes,
            "segments_over_limit": self.segments_over_limit,
            "blocks_over_limit": self.blocks_over_limit,
            "empty_descriptions": self.empty_descriptions,
            "empty_blocks": self.empty_blocks,
            "sentinel_rows": self.sentinel_rows,
        }

    def reconcile(self) -> list[str]:
        """
        Compare records with data against rows produced.

        Returns:
            Discrepancy messages; empty when every record with data
            produced at least one row and no field was left unclassified
        """
        issues = []
        expected_min = self.records_with_data - len(self.explained_empty)

        if self.total_rows < expected_min:
            issues.append(
                f"rows: {self.total_rows} rows for {expected_min} records with data"
            )
        if self.unexplained_empty:
            issues.append(
                f"records with data but no rows: {len(self.unexplained_empty)} "
                f"(e.g. {self._sample(self.unexplained_empty)})"
            )
        if self.unknown_shapes:
            issues.append(
                f"unknown shapes: {self.unknown_shapes} "
                f"(e.g. {self._sample(self.unknown_brand_ids)})"
            )
        if self.segments_over_limit:
            issues.append(f"container segments over limit: {self.segments_over_limit}")
        if self.blocks_over_limit:
            issues.append(f"pack-size blocks over limit: {self.blocks_over_limit}")
        return issues

    def known_limitations(self) -> list[str]:
        """Issues that are expected artefacts of the source, not parse failures."""
        notes = []
        if self.malformed_discards:
            notes.append(
                f"malformed container descriptors discarded: {self.malformed_discards}"
            )
        if self.explained_empty:
            notes.append(
                f"records with no usable packaging data: {len(self.explained_empty)} "
                f"(e.g. {self._sample(self.explained_empty)})"
            )
        return notes

    def has_discrepancies(self) -> bool:
        return bool(self.reconcile())

    def print_final_report(self) -> None:
        """Print the verification report table."""
        if self.records == 0:
            print("\n[Verification] No records processed.")
            return

        gate = "FAIL" if self.has_discrepancies() else "PASS"

        print("\n" + "=" * 60)
        print(f"Package Table Verification  [{gate}]")
        print("=" * 60)
        print(f"  Medicine records:        {self.records:>7}")
        print(f"  With packaging data:     {self.records_with_data:>7}")
        print(f"  In neither child table:  {self.records_without_rows:>7}")

        print("\n  Medicine_PackageContainer")
        print(f"    Rows:                  {self.container_rows:>7}")
        print(f"    Distinct medicines:    {len(self.container_brand_ids):>7}")
        print(f"    NULL Container_Size:   {self.null_container_size:>7}")
        print(f"    NULL Unit_Price:       {self.null_unit_price:>7}"
              f"  (sentinels: {self.sentinel_rows})")

        print("\n  Medicine_PackageSize")
        print(f"    Rows:                  {self.pack_size_rows:>7}")
        print(f"    Distinct medicines:    {len(self.pack_size_brand_ids):>7}")
        print(f"    NULL Pack_Size:        {self.null_pack_count:>7}")
        print(f"    NULL Pack_Price:       {self.null_pack_price:>7}")

        print("\n  Container shapes:")
        for shape, count in sorted(self.container_shapes.items(), key=lambda x: -x[1]):
            print(f"    {shape:<28} {count:>7}")

        if self.rules_applied:
            print("\n  Normalization rules applied:")
            for rule, count in sorted(self.rules_applied.items(), key=lambda x: -x[1]):
                print(f"    {rule:<28} {count:>7}")

        print("\n  Parse issues:")
        print(f"    Unparseable prices:    {self.unparseable_prices:>7}")
        print(f"    Unparseable counts:    {self.unparseable_counts:>7}")
        print(f"    Unresolved flat price: {self.unresolved_flat_prices:>7}")
        print(f"    Empty descriptions:    {self.empty_descriptions:>7}")
        print(f"    Empty blocks:          {self.empty_blocks:>7}")

        limitations = self.known_limitations()
        if limitations:
            print("\n  Known limitations:")
            for note in limitations:
                print(f"    {note}")

        issues = self.reconcile()
        if issues:
            print("\n  Discrepancies:")
            for issue in issues:
                print(f"    {issue}")

        print("=" * 60)

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _count_unknown(self, brand_id: int) -> None:
        self.unknown_shapes += 1
        self.unknown_brand_ids.append(brand_id)

    @staticmethod
    def _sample(brand_ids: list[int], n: Optional[int] = None) -> str:
        """Format the first few brand ids of an issue list."""
        return ", ".join(str(b) for b in brand_ids[:n or _SAMPLE_SIZE])
