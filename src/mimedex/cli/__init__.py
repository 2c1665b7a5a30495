# topmark:header:start
#
#   project      : Mimedex
#   file         : __init__.py
#   file_relpath : src/mimedex/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Command-line interface for Mimedex.

The ``mimedex`` command (also ``python -m mimedex``) is a Click group; see
[`mimedex.cli.main`][mimedex.cli.main] for the entry point and
``mimedex.cli.commands`` for the subcommands.
"""
