"""Ingestion — map decoded spreadsheet rows onto record models.

Usage:
    from data_alchemist.ingestion import convert_rows

    result = convert_rows(headers, rows, "workers")
    workers = result.records
"""

from data_alchemist.ingestion.mapping import IngestionResult, convert_rows, map_headers

__all__ = ["IngestionResult", "convert_rows", "map_headers"]
