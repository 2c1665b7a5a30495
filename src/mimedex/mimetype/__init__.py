# topmark:header:start
#
#   project      : Mimedex
#   file         : __init__.py
#   file_relpath : src/mimedex/mimetype/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MIME type values and their serialized forms."""

from __future__ import annotations

from mimedex.mimetype.base import ENCODINGS, MimeType, simplified
from mimedex.mimetype.serializers import (
    dump_bucket,
    from_array,
    from_dict,
    load_bucket,
    to_array,
    to_dict,
)

__all__ = [
    "ENCODINGS",
    "MimeType",
    "simplified",
    "to_dict",
    "from_dict",
    "to_array",
    "from_array",
    "dump_bucket",
    "load_bucket",
]
