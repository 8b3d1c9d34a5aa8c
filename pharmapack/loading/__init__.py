"""
Materialization of the packaging child tables.

Modules:
    source       - Medicine source file adapter (MedicineRecord)
    materializer - RowMaterializer: records -> child rows + summary
"""

from .materializer import MaterializeResult, RowMaterializer, materialize
from .source import (
    CONTAINER_FIELDNAMES,
    PACK_SIZE_FIELDNAMES,
    read_medicine_records,
    records_from_rows,
)

__all__ = [
    'RowMaterializer',
    'MaterializeResult',
    'materialize',
    'read_medicine_records',
    'records_from_rows',
    'CONTAINER_FIELDNAMES',
    'PACK_SIZE_FIELDNAMES',
]
