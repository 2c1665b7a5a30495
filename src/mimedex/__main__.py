# topmark:header:start
#
#   project      : Mimedex
#   file         : __main__.py
#   file_relpath : src/mimedex/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for ``python -m mimedex``.

Examples:
    Look up a content type using the module interface::

        python -m mimedex lookup text/plain
"""

from __future__ import annotations

from mimedex.cli.main import cli

if __name__ == "__main__":
    cli()
