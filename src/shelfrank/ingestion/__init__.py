"""
File ingestion for shelfrank.

Detects the file family by suffix, decodes rows as text, and normalizes them
into canonical product records through a shared alias table.
"""

from .loader import detect_file_format, ingest, ingest_path
from .row_normalizer import normalize

__all__ = ["detect_file_format", "ingest", "ingest_path", "normalize"]
