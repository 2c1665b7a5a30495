# topmark:header:start
#
#   project      : Mimedex
#   file         : test_serializers.py
#   file_relpath : tests/mimetype/test_serializers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for the hash, array and bucket forms of `MimeType`."""

from __future__ import annotations

import json

import pytest

from mimedex.errors import CorruptionError, InvalidArgument, InvalidContentType
from mimedex.mimetype import (
    MimeType,
    dump_bucket,
    from_array,
    from_dict,
    load_bucket,
    to_array,
    to_dict,
)
from tests.conftest import parametrize


@pytest.fixture
def msword() -> MimeType:
    return MimeType(
        "application/x-msword",
        extensions=["doc", "dot"],
        encoding="base64",
        obsolete=True,
        docs="use-instead:application/msword",
        url=["IANA", "[Lindner]"],
    )


def test_to_dict(msword: MimeType) -> None:
    assert to_dict(msword) == {
        "Content-Type": "application/x-msword",
        "Content-Transfer-Encoding": "base64",
        "Extensions": ["doc", "dot"],
        "System": None,
        "Obsolete": True,
        "Docs": "use-instead:application/msword",
        "URL": ["IANA", "[Lindner]"],
        "Registered": False,
    }


def test_from_dict_round_trip(msword: MimeType) -> None:
    restored = from_dict(to_dict(msword))
    assert restored.same_as(msword)
    assert restored.use_instead == ["application/msword"]


def test_from_dict_normalizes_keys() -> None:
    """Keys match case-insensitively and with ``_`` for ``-``; unknown keys are ignored."""
    t = from_dict(
        {
            "content_type": "text/x-vcard",
            "CONTENT-TRANSFER-ENCODING": "8bit",
            "extensions": "vcf",
            "system": "mac",
            "comment": "ignored",
        }
    )
    assert t.content_type == "text/x-vcard"
    assert t.encoding == "8bit"
    assert t.extensions == ["vcf"]
    assert t.system == "mac"
    assert not t.registered


def test_from_dict_requires_content_type() -> None:
    with pytest.raises(InvalidContentType):
        from_dict({"Extensions": ["txt"]})


def test_to_array(msword: MimeType) -> None:
    assert to_array(msword) == [
        "application/x-msword",
        ["doc", "dot"],
        "base64",
        None,
        True,
        "use-instead:application/msword",
        ["IANA", "[Lindner]"],
        False,
    ]


def test_from_array_accepts_packed_and_unpacked_forms() -> None:
    packed = from_array(["application/x-ruby", ["rb"], "8bit"])
    unpacked = from_array("application/x-ruby", ["rb"], "8bit")
    assert packed.same_as(unpacked)
    assert packed.extensions == ["rb"]
    assert packed.encoding == "8bit"
    assert not packed.is_obsolete()


def test_from_array_round_trip(msword: MimeType) -> None:
    assert from_array(to_array(msword)).same_as(msword)


@parametrize("args", [(), tuple(range(9))])
def test_from_array_rejects_bad_lengths(args: tuple[object, ...]) -> None:
    with pytest.raises(InvalidArgument):
        from_array(*args)


def test_from_array_rejects_bad_encoding() -> None:
    with pytest.raises(InvalidArgument):
        from_array("text/plain", [], "utf-8")


def test_empty_bucket_round_trip() -> None:
    assert load_bucket(dump_bucket([])) == []


def test_bucket_is_utf8_json(msword: MimeType) -> None:
    raw = dump_bucket([msword, MimeType("text/plain", docs="Klartext für Menschen")])
    assert isinstance(raw, bytes)
    payload = json.loads(raw.decode("utf-8"))
    assert [item["Content-Type"] for item in payload] == ["application/x-msword", "text/plain"]
    restored = load_bucket(raw)
    assert restored[1].docs == "Klartext für Menschen"


@parametrize(
    "data",
    [
        b"\xff\xfe not json",
        b"{not json",
        b'{"Content-Type": "text/plain"}',
        b'["text/plain"]',
        b'[{"Content-Type": "plain"}]',
        b'[{"Content-Type": "text/plain", "Content-Transfer-Encoding": "utf-8"}]',
        b'[{"Content-Type": "text/plain", "Docs": 5}]',
        b'[{"Content-Type": "text/plain", "Docs": ["a"]}]',
        b'[{"Content-Type": "text/plain", "System": "("}]',
        b'[{"Content-Type": "text/plain", "System": ["vms"]}]',
    ],
)
def test_load_bucket_rejects_corrupt_data(data: bytes) -> None:
    with pytest.raises(CorruptionError):
        load_bucket(data)
