# topmark:header:start
#
#   project      : Mimedex
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running Mimedex in a controlled working directory.

`run_cli_in()` changes the process working directory to the given `tmp_path`
before invoking the Click CLI, so configuration discovery and relative index
paths resolve against the temporary test directory instead of the repository.
"""

from __future__ import annotations

import os
from typing import IO, TYPE_CHECKING, Any, Sequence

import pytest
from click.testing import CliRunner, Result

from mimedex.cli.exit_codes import ExitCode
from mimedex.cli.main import cli
from mimedex.config.logging import TRACE_LEVEL, setup_logging

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

LOCAL_TYPES = """\
# site-local definitions
application/x-site @site :8bit =Site pages
*!application/site @osite :8bit =use-instead:application/x-site
vms:text/x-memo @memo :8bit
"""


@pytest.fixture(autouse=True)
def restore_test_logging() -> Iterator[None]:
    """Reinstall the session logging setup replaced by the CLI group callback."""
    yield
    setup_logging(TRACE_LEVEL)


def run_cli_in(
    tmp_path: Path,
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI with `tmp_path` as the working directory.

    Args:
        tmp_path (Path): Pytest-provided temporary directory used as the CWD for the
            command invocation.
        argv (str | Sequence[str] | None): CLI argument vector, e.g.
            ``["lookup", "text/plain"]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input.

    Returns:
        Result: The `click.testing.Result` produced by
            `click.testing.CliRunner.invoke`.

    Example:
        ```python
        res = run_cli_in(tmp_path, ["build-index", "idx"])  # idx created in tmp_path
        assert res.exit_code == ExitCode.SUCCESS
        ```
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, argv, input=input_text)
    finally:
        os.chdir(cwd)


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI without changing the working directory.

    Use this helper when the test does not depend on configuration files or
    paths under ``tmp_path`` (e.g. ``--help`` or ``version``).

    Args:
        argv (str | Sequence[str] | None): CLI argument vector.
        input_text (str | bytes | IO[Any] | None): Optional standard input.

    Returns:
        Result: The `click.testing.Result` produced by
            `click.testing.CliRunner.invoke`.
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text)


def write_local_config(tmp_path: Path, *, include_bundled: bool = False, **extra: str) -> Path:
    """Write ``local.types`` and a ``mimedex.toml`` loading it into ``tmp_path``.

    Args:
        tmp_path (Path): Project directory.
        include_bundled (bool): Value of the ``include_bundled`` setting.
        **extra (str): Additional string settings (e.g. ``platform="openvms"``).

    Returns:
        Path: The configuration file.
    """
    (tmp_path / "local.types").write_text(LOCAL_TYPES, encoding="utf-8")
    lines = [
        'definitions = ["local.types"]',
        f"include_bundled = {'true' if include_bundled else 'false'}",
        *(f'{key} = "{value}"' for key, value in extra.items()),
    ]
    config = tmp_path / "mimedex.toml"
    config.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return config


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0).

    Args:
        result (Result): The Result object returned by `run_cli` or `run_cli_in`.
    """
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_FAILURE(result: Result) -> None:
    """Assert that the command exited with FAILURE (code 1): some query matched nothing.

    Args:
        result (Result): The Result object returned by `run_cli` or `run_cli_in`.
    """
    assert result.exit_code == ExitCode.FAILURE, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with USAGE_ERROR (code 64).

    Args:
        result (Result): The Result object returned by `run_cli` or `run_cli_in`.
    """
    # Click's own parser errors exit with 2; this is for Mimedex usage errors.
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


def assert_exit(result: Result, code: ExitCode) -> None:
    """Assert that the command exited with ``code``.

    Args:
        result (Result): The Result object returned by `run_cli` or `run_cli_in`.
        code (ExitCode): The expected exit code.
    """
    assert result.exit_code == code, result.output
