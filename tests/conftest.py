# topmark:header:start
#
#   project      : Mimedex
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the Mimedex test suite.

This file sets up global fixtures and customizes the logging configuration for
test runs, and provides small typed helpers shared by the test packages.

Notes:
    Fixtures build registries explicitly (there is no global registry), so
    tests can mutate them freely.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from mimedex.config import logging
from mimedex.mimetype import MimeType
from mimedex.registry import Registry

if TYPE_CHECKING:
    from pathlib import Path

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.slow`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def isolate_mimedex_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the developer's shell environment does not leak into tests.

    Clears ``MIMEDEX_LOG_LEVEL`` (avoids accidental DEBUG/TRACE noise) as well
    as ``MIMEDEX_PLATFORM`` and ``MIMEDEX_INDEX`` (which override settings).

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to
            manipulate environment variables.
    """
    for name in ("MIMEDEX_LOG_LEVEL", "MIMEDEX_PLATFORM", "MIMEDEX_INDEX"):
        monkeypatch.delenv(name, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE so diagnostics are captured during tests.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run a test in an isolated temporary working directory.

    Configuration discovery walks upward from the working directory, so tests
    that rely on discovery must not see the repository's own ``pyproject.toml``.

    Args:
        tmp_path (Path): The pytest-provided temporary directory for the test.
        monkeypatch (pytest.MonkeyPatch): Fixture to change the working directory.

    Returns:
        Path: The isolated working directory.
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


def make_type(content_type: str, **attrs: Any) -> MimeType:
    """Return a `MimeType` built with keyword attributes."""
    return MimeType(content_type, **attrs)


@pytest.fixture
def text_plain() -> MimeType:
    """Generic, complete ``text/plain``."""
    return make_type("text/plain", extensions=["txt", "asc"], encoding="8bit")


@pytest.fixture
def text_plain_vms() -> MimeType:
    """VMS-specific, incomplete ``text/plain``."""
    return make_type("text/plain", system="vms", encoding="8bit")


@pytest.fixture
def application_xml() -> MimeType:
    """``application/xml`` registered for ``xml``."""
    return make_type("application/xml", extensions=["xml", "xsl"], encoding="8bit", url="RFC3023")


@pytest.fixture
def sample_registry(text_plain: MimeType, application_xml: MimeType) -> Registry:
    """Registry holding ``text/plain`` (``txt``, ``asc``) and ``application/xml``."""
    registry = Registry(platform="linux")
    registry.add(text_plain, application_xml)
    return registry


@pytest.fixture
def mixed_registry(
    text_plain: MimeType, text_plain_vms: MimeType, application_xml: MimeType
) -> Registry:
    """Registry with generic and VMS ``text/plain`` plus JavaScript variants."""
    registry = Registry(platform="vms")
    registry.add(
        text_plain_vms,
        text_plain,
        application_xml,
        make_type("text/xml", extensions="xml", encoding="8bit"),
        make_type("application/javascript", extensions="js", encoding="8bit"),
        make_type(
            "application/x-javascript",
            extensions="js",
            encoding="8bit",
            obsolete=True,
            docs="use-instead:application/javascript",
        ),
    )
    return registry
