"""
Helpers package.
"""

from .address_helper import address_sort_key, address_text, format_address, normalize_address, parse_address
from .keys_helper import (
    content_hash,
    function_uid,
    import_uid,
    library_key,
    normalize_string_value,
    scoped_import_uid,
    string_uid,
)
from .logging_helper import BxLogFilter, clear_log_context, configure_logging, set_log_context
from .serialization_helper import dumps_pretty, to_jsonable
from .variants_helper import infer_binary_format, parse_call_type

__all__ = [
    "BxLogFilter",
    "address_sort_key",
    "address_text",
    "clear_log_context",
    "configure_logging",
    "content_hash",
    "dumps_pretty",
    "format_address",
    "function_uid",
    "import_uid",
    "infer_binary_format",
    "library_key",
    "normalize_address",
    "normalize_string_value",
    "parse_address",
    "parse_call_type",
    "scoped_import_uid",
    "set_log_context",
    "string_uid",
    "to_jsonable",
]
