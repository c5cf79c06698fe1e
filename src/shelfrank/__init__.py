"""Shelfrank: product listing ingestion and display-order scoring."""

from .errors import (
    DecodeError,
    EmptyFileError,
    IngestionError,
    MissingRequiredFieldError,
    UnsupportedFormatError,
    ValidationError,
)
from .export import export_csv, write_template_csv
from .ingestion import ingest, ingest_path, normalize
from .models import ProductRecord, ScoredBatch, ScoredProduct
from .scoring import apply_suggested_ranks, score

__all__ = [
    "apply_suggested_ranks",
    "DecodeError",
    "EmptyFileError",
    "export_csv",
    "ingest",
    "ingest_path",
    "IngestionError",
    "MissingRequiredFieldError",
    "normalize",
    "ProductRecord",
    "score",
    "ScoredBatch",
    "ScoredProduct",
    "UnsupportedFormatError",
    "ValidationError",
    "write_template_csv",
]

__version__ = "0.1.0"
