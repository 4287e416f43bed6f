"""
Adapters between raw external data and canonical span arrays.

- ingest: flat bounds, pairs or records in, canonical array out
- export: canonical array out as packed bounds, pairs, records or text
"""

from .ingest import (
    END_KEYS,
    START_KEYS,
    RawArrayPair,
    RawInput,
    RawPair,
    RawRecord,
    classify,
    detect_key,
    ingest,
)
from .export import (
    format_bound,
    to_packed,
    to_pairs,
    to_records,
    to_string,
)

__all__ = [
    # Ingestion
    "START_KEYS",
    "END_KEYS",
    "RawPair",
    "RawArrayPair",
    "RawRecord",
    "RawInput",
    "classify",
    "detect_key",
    "ingest",
    # Export
    "to_packed",
    "to_pairs",
    "to_records",
    "format_bound",
    "to_string",
]
