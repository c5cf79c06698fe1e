"""Error types raised by shelfrank.

Ingestion errors are terminal for the current attempt: no partial batch is
ever returned alongside them. Numeric parse failures are not errors.
"""
from __future__ import annotations

from typing import Optional


class IngestionError(ValueError):
    """Base class for every failure surfaced by the ingestion pipeline."""


class UnsupportedFormatError(IngestionError):
    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(f"Unsupported file format for '{file_name}'. Use CSV or Excel (.csv, .xlsx, .xls)")


class EmptyFileError(IngestionError):
    def __init__(self, file_name: Optional[str] = None) -> None:
        self.file_name = file_name
        target = f"'{file_name}'" if file_name else "Input"
        super().__init__(f"{target} contains no data rows")


class DecodeError(IngestionError):
    def __init__(self, file_name: str, reason: str) -> None:
        self.file_name = file_name
        self.reason = reason
        super().__init__(f"Could not read '{file_name}': {reason}")


class ValidationError(IngestionError):
    """A row could not be turned into a canonical product record."""


class MissingRequiredFieldError(ValidationError):
    def __init__(self, row_number: int, field: str = "product_name") -> None:
        self.row_number = row_number
        self.field = field
        super().__init__(f"Row {row_number}: missing required field '{field}'")


class CatalogError(Exception):
    """The local catalog file cannot be read or updated."""


class UnknownProductError(CatalogError, KeyError):
    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"No catalog product with id '{identifier}'")

    def __str__(self) -> str:
        return str(self.args[0])


class ConfigError(ValueError):
    """Configuration file is unreadable or fails validation."""
