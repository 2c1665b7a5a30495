# topmark:header:start
#
#   project      : Mimedex
#   file         : constants.py
#   file_relpath : src/mimedex/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Mimedex Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

MIMEDEX_VERSION: str = get_version("mimedex")

# Package holding the bundled `*.types` definition files:
DEFINITIONS_PACKAGE: str = "mimedex.definitions"
DEFINITIONS_SUFFIX: str = ".types"

# Configuration discovery
CONFIG_FILE_NAME: str = "mimedex.toml"
PYPROJECT_FILE_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: str = "mimedex"

# Environment variables
ENV_LOG_LEVEL: str = "MIMEDEX_LOG_LEVEL"
ENV_PLATFORM: str = "MIMEDEX_PLATFORM"
ENV_INDEX_PATH: str = "MIMEDEX_INDEX"

# Persistent index layout
INDEX_SIMPLIFIED_NAME: str = "simplified.db"
INDEX_EXTENSION_NAME: str = "ext.db"
INDEX_META_NAME: str = "index.toml"
INDEX_FORMAT_VERSION: int = 1
DEFAULT_CACHE_CAPACITY: int = 100
