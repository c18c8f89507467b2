"""Tabular Records - normalize heterogeneous in-memory records into table columns and rows."""

from tabular_records.core.columns import keys_for_records, keys_to_columns
from tabular_records.core.config import settings
from tabular_records.core.logging import configure_logging
from tabular_records.core.records import (
    ITEM_KEY,
    AssocOrdered,
    AssocUnordered,
    Positional,
    Record,
    RecordShapeError,
    Scalar,
    classify_record,
    get_field,
    keys_for_record,
)
from tabular_records.core.schema import MappedSchema, SchemaDescriptor, orm_schema
from tabular_records.schemas.table import Column, TablePreview
from tabular_records.services.table_service import TableService
from tabular_records.utils.render import render
from tabular_records.utils.rows import record_to_row, records_to_rows

__all__ = [
    # Main API
    "keys_for_records",
    "keys_to_columns",
    "record_to_row",
    "records_to_rows",
    "get_field",
    "orm_schema",
    "render",
    "TableService",
    # Record shapes
    "Record",
    "Positional",
    "AssocOrdered",
    "AssocUnordered",
    "Scalar",
    "ITEM_KEY",
    "classify_record",
    "keys_for_record",
    "RecordShapeError",
    # Schemas
    "SchemaDescriptor",
    "MappedSchema",
    "Column",
    "TablePreview",
    # Configuration
    "settings",
    "configure_logging",
]

__version__ = "0.1.0"

if settings.configure_logging:
    configure_logging(settings.log_level)
