# topmark:header:start
#
#   project      : Mimedex
#   file         : __init__.py
#   file_relpath : src/mimedex/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Subcommands of the ``mimedex`` CLI."""
