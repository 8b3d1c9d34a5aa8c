"""
Medicine Source

Adapts rows of the medicine source file into MedicineRecord objects.
Only the brand id and the two packaging fields are read; every other
column belongs to the brand loader.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator

from ..common.csv_utils import read_csv
from ..common.text_utils import clean_source_field
from ..models import MedicineRecord

logger = logging.getLogger(__name__)

BRAND_ID_COLUMN = "Brand_ID"
CONTAINER_COLUMN = "Package_Container"
PACK_SIZE_COLUMN = "Package_Size"

CONTAINER_FIELDNAMES = ["Brand_ID", "Container_Size", "Unit_Price"]
PACK_SIZE_FIELDNAMES = ["Brand_ID", "Pack_Size", "Pack_Price"]


def records_from_rows(rows: Iterable[Dict[str, str]]) -> Iterator[MedicineRecord]:
    """
    Convert source rows into medicine records.

    Rows without a numeric Brand_ID get a sequential id, the way the
    Medicine table's identity column numbers them.

    Args:
        rows: Dictionaries keyed by source column name

    Yields:
        MedicineRecord per row
    """
    for position, row in enumerate(rows, start=1):
        raw_id = (row.get(BRAND_ID_COLUMN) or "").strip()
        try:
            brand_id = int(raw_id)
        except ValueError:
            if raw_id:
                logger.debug("Row %d: non-numeric Brand_ID %r, using position", position, raw_id)
            brand_id = position

        yield MedicineRecord(
            brand_id=brand_id,
            container_descriptor=clean_source_field(row.get(CONTAINER_COLUMN)),
            pack_size_descriptor=clean_source_field(row.get(PACK_SIZE_COLUMN)),
        )


def read_medicine_records(file_path: str | Path) -> Iterator[MedicineRecord]:
    """
    Read medicine records from the source CSV.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Medicine source not found: {path}")
    return records_from_rows(read_csv(path))
