# topmark:header:start
#
#   project      : Mimedex
#   file         : console_api.py
#   file_relpath : src/mimedex/cli/console_api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output protocol shared by the Mimedex commands.

Query results (type listings, JSON documents, index summaries) go to
`ConsoleLike.print`; "no match" notices go to `ConsoleLike.warn`, and
translated errors to `ConsoleLike.error`. Diagnostics never pass through here.
"""

from __future__ import annotations

from typing import Protocol


class ConsoleLike(Protocol):
    """What `ClickConsole` (and test doubles) must provide."""

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Emit one result line on stdout."""
        ...

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Emit a notice on stderr, e.g. when a query matches nothing."""
        ...

    def error(self, text: str, *, nl: bool = True) -> None: ...

    def styled(self, text: str, **style_kwargs: object) -> str:
        """Return ``text`` decorated for the terminal; unchanged without color.

        Commands style content type names and flag lists with ``bold`` and
        ``fg`` keywords; JSON output is never styled.
        """
        ...
