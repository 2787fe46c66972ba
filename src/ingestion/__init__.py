"""Data ingestion utilities for sales forecast pipelines."""

from .record_source import load_records, records_from_frame
from .record_validation import (
    RecordFieldConfig,
    SalesObservation,
    extract_period,
    parse_quantity,
    validate_frame,
    validate_records,
)

__all__ = [
    "load_records",
    "records_from_frame",
    "RecordFieldConfig",
    "SalesObservation",
    "extract_period",
    "parse_quantity",
    "validate_frame",
    "validate_records",
]
