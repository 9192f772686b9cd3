"""Input/output helpers for sitecopy.

This package contains the JSON file reader and writer used by the CLI driver.
"""

from .storage import FileSaveWriter, dump_json, read_json_document, write_json_document

__all__ = ["FileSaveWriter", "dump_json", "read_json_document", "write_json_document"]
