# topmark:header:start
#
#   project      : Mimedex
#   file         : __init__.py
#   file_relpath : src/mimedex/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration and logging for Mimedex.

* [`mimedex.config.settings`][] resolves the effective [`Settings`][mimedex.config.Settings]
  from TOML files and the environment.
* [`mimedex.config.logging`][] provides the TRACE-aware logger and colored output.
"""

from __future__ import annotations

from mimedex.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
