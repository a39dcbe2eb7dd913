"""
Output sinks: CSV file (default) and legacy document store.
"""
from extract_serac.sinks.csv_sink import write_csv
from extract_serac.sinks.document_store import report_to_document, upsert_documents

__all__ = [
    "write_csv",
    "report_to_document",
    "upsert_documents",
]
