from .read import load_spreadsheet, clean_header, clean_headers, compute_sha256
from .write import write_dwc_tables, write_manifest
from .logs import setup_logging

__all__ = [
    "load_spreadsheet",
    "clean_header",
    "clean_headers",
    "compute_sha256",
    "write_dwc_tables",
    "write_manifest",
    "setup_logging",
]
