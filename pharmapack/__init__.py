"""
Medicine Packaging Descriptor Parser

Turns the free-text Package_Container and Package_Size fields of the
medicine catalogue into normalized child rows.

Modules:
    models     - Data models (MedicineRecord, ContainerRow, PackSizeRow, ParserSettings)
    common     - Shared utilities (config loader, logging, CSV, text primitives)
    parsing    - Classifier, fragment normalizer and descriptor parsers
    loading    - Source adapter and row materializer
    validation - Run summary and reconciliation report
"""
