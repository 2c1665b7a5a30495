# topmark:header:start
#
#   project      : Mimedex
#   file         : test_registry.py
#   file_relpath : tests/registry/test_registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for `Registry` insertion, lookups and views."""

from __future__ import annotations

import logging
import re

import pytest

from mimedex.mimetype import MimeType
from mimedex.registry import Registry, extension_of
from tests.conftest import make_type, parametrize

REGISTRY_LOGGER = "mimedex.registry.registry"


@parametrize(
    "filename, expected",
    [
        ("citydesk.xml", "xml"),
        ("Report.ASC", "asc"),
        ("archive.tar.gz", "gz"),
        ("  padded.js \n", "js"),
        (".bashrc", "bashrc"),
        ("noext", ""),
        ("", ""),
    ],
)
def test_extension_of(filename: str, expected: str) -> None:
    assert extension_of(filename) == expected


def test_type_for_scenarios(
    sample_registry: Registry, text_plain: MimeType, application_xml: MimeType
) -> None:
    """Extension lookups find the registered types and nothing else."""
    assert sample_registry.type_for("citydesk.xml") == [application_xml]
    assert sample_registry.type_for("report.asc") == [text_plain]
    assert sample_registry.type_for("noext") == []
    assert sample_registry.of("notes.txt") == [text_plain]


def test_type_for_is_case_insensitive(mixed_registry: Registry) -> None:
    upper = mixed_registry.type_for("a.JS")
    assert upper == mixed_registry.type_for("a.js")
    assert [t.content_type for t in upper] == ["application/javascript", "application/x-javascript"]


def test_type_for_returns_a_new_list(sample_registry: Registry) -> None:
    found = sample_registry.type_for("citydesk.xml")
    found.clear()
    assert len(sample_registry.type_for("citydesk.xml")) == 1


def test_type_for_platform_filter() -> None:
    vms_doc = make_type("text/plain", system="vms", extensions="doc")
    word = make_type("application/msword", extensions="doc")
    registry = Registry(platform="vms")
    registry.add(word, vms_doc)

    assert registry.type_for("memo.doc") == [word, vms_doc]
    assert registry.type_for("memo.doc", platform=True) == [vms_doc]
    assert Registry(platform="linux").type_for("memo.doc", platform=True) == []


def test_lookup_ranks_generic_first(
    mixed_registry: Registry, text_plain: MimeType, text_plain_vms: MimeType
) -> None:
    """The generic, complete record wins although it was registered second."""
    found = mixed_registry.lookup("text/plain")
    assert found[0] is text_plain
    assert found[1] is text_plain_vms
    assert mixed_registry["TEXT/PLAIN"] == found


def test_lookup_simplifies_the_query(mixed_registry: Registry) -> None:
    found = mixed_registry.lookup("application/x-javascript")
    assert [t.content_type for t in found] == ["application/javascript", "application/x-javascript"]


def test_lookup_filters(
    mixed_registry: Registry, text_plain: MimeType, text_plain_vms: MimeType
) -> None:
    assert mixed_registry.lookup("text/plain", complete=True) == [text_plain]
    assert mixed_registry.lookup("text/plain", platform=True) == [text_plain_vms]
    assert mixed_registry.lookup("text/plain", complete=True, platform=True) == []


def test_lookup_by_pattern(mixed_registry: Registry) -> None:
    """Patterns are searched in every simplified key and the matches unioned."""
    found = mixed_registry.lookup(re.compile(r"^text/"))
    assert sorted({t.simplified for t in found}) == ["text/plain", "text/xml"]
    assert len(found) == 3

    assert mixed_registry.lookup(re.compile("xml$"), complete=True)[0].simplified == (
        "application/xml"
    )


def test_lookup_by_mime_type_returns_it_alone(mixed_registry: Registry) -> None:
    outsider = make_type("model/vrml")
    assert mixed_registry.lookup(outsider) == [outsider]


@parametrize("query", ["model/vrml", "garbage", ""])
def test_lookup_misses_are_empty(mixed_registry: Registry, query: str) -> None:
    assert mixed_registry.lookup(query) == []


def test_views_and_iteration(mixed_registry: Registry) -> None:
    assert mixed_registry.count() == 6
    assert len(mixed_registry) == 6
    assert list(mixed_registry.simplified_types()) == [
        "text/plain",
        "application/xml",
        "text/xml",
        "application/javascript",
    ]
    assert list(mixed_registry.extensions()) == ["txt", "asc", "xml", "xsl", "js"]

    first = [t.content_type for t in mixed_registry]
    assert first == [t.content_type for t in mixed_registry.each()]
    assert first[:2] == ["text/plain", "text/plain"]


def test_contains(mixed_registry: Registry, text_plain: MimeType) -> None:
    assert text_plain in mixed_registry
    assert "application/x-xml" in mixed_registry
    assert "model/vrml" not in mixed_registry
    assert 42 not in mixed_registry


def test_add_merges_registries_and_iterables(sample_registry: Registry) -> None:
    registry = Registry()
    registry.add(sample_registry, [make_type("image/png", extensions="png")])
    assert registry.count() == 3
    assert [t.content_type for t in registry.type_for("logo.PNG")] == ["image/png"]


def test_equal_duplicates_warn_and_are_kept(caplog: pytest.LogCaptureFixture) -> None:
    registry = Registry()
    registry.add(make_type("text/plain", extensions="txt"))
    with caplog.at_level(logging.WARNING, logger=REGISTRY_LOGGER):
        registry.add(make_type("text/plain", extensions="text"))

    assert "already registered" in caplog.text
    assert registry.count() == 2
    assert len(registry.type_for("a.text")) == 1


def test_same_instance_is_never_inserted_twice(caplog: pytest.LogCaptureFixture) -> None:
    t = make_type("text/plain", extensions="txt")
    registry = Registry()
    with caplog.at_level(logging.WARNING, logger=REGISTRY_LOGGER):
        registry.add(t, t)
    assert registry.count() == 1
    assert registry.type_for("a.txt") == [t]
    assert "already registered" in caplog.text


def test_duplicate_warnings_can_be_silenced(caplog: pytest.LogCaptureFixture) -> None:
    registry = Registry()
    with caplog.at_level(logging.WARNING, logger=REGISTRY_LOGGER):
        registry.add(make_type("text/plain"), make_type("text/plain"), warn_duplicates=False)
    assert registry.count() == 2
    assert caplog.text == ""


def test_marker_only_media_type_is_found_by_its_simplified_key() -> None:
    registry = Registry(platform="linux")
    t = make_type("x-/plain", extensions="xp")
    registry.add(t)
    assert list(registry.simplified_types()) == ["x-/plain"]
    assert registry.lookup(t.simplified) == [t]
    assert registry.lookup("X-/Plain") == [t]


def test_empty_extensions_never_match_trailing_dots() -> None:
    registry = Registry(platform="linux")
    registry.add(make_type("text/plain", extensions=["", "txt"]))
    assert registry.type_for("notes.") == []
    assert [t.content_type for t in registry.type_for("notes.txt")] == ["text/plain"]
