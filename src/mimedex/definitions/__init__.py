# topmark:header:start
#
#   project      : Mimedex
#   file         : __init__.py
#   file_relpath : src/mimedex/definitions/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bundled MIME type definitions (``*.types`` resources).

The files in this package use the line grammar documented in
[`mimedex.registry.loader`][mimedex.registry.loader] and are loaded in sorted
file name order by
[`load_default_registry`][mimedex.registry.loader.load_default_registry].
"""
