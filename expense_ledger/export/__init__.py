"""Export package."""

from expense_ledger.export.csv_encoder import (
    CSV_HEADER,
    EmptyExportSetError,
    build_export,
    encode_csv,
    export_filename,
    format_amount,
    format_fixed,
)

__all__ = [
    "CSV_HEADER",
    "EmptyExportSetError",
    "build_export",
    "encode_csv",
    "export_filename",
    "format_amount",
    "format_fixed",
]
