from .archive_writer import ZipArchiveWriter
from .assembler import ArchiveAssembler
from .flat_request import name_from_url, request_from_urls
from .path_resolver import resolve_entries, unique_file_name
from .validation import check_name, validate_request

__all__ = [
    "ZipArchiveWriter",
    "ArchiveAssembler",
    "resolve_entries",
    "unique_file_name",
    "name_from_url",
    "request_from_urls",
    "check_name",
    "validate_request",
]
