# topmark:header:start
#
#   project      : Mimedex
#   file         : serializers.py
#   file_relpath : src/mimedex/mimetype/serializers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pure serializers for `MimeType` values.

Three representations are supported:

- the *hash* form (`to_dict` / `from_dict`), keyed by header-style names
  (``Content-Type``, ``Content-Transfer-Encoding``, ...); this is the form
  stored in persistent index buckets and printed by the CLI JSON output;
- the *array* form (`to_array` / `from_array`):
  ``[content_type, extensions, encoding, system, obsolete, docs, url, registered]``;
- the *bucket* form (`dump_bucket` / `load_bucket`): a UTF-8 JSON array of hash
  forms, one bucket per persistent index key.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, TypedDict, cast

from mimedex.errors import CorruptionError, InvalidArgument, InvalidContentType
from mimedex.mimetype.base import MimeType

if TYPE_CHECKING:
    from collections.abc import Iterable

MimeTypeDict = TypedDict(
    "MimeTypeDict",
    {
        "Content-Type": str,
        "Content-Transfer-Encoding": str,
        "Extensions": list[str],
        "System": "str | None",
        "Obsolete": bool,
        "Docs": "str | None",
        "URL": list[str],
        "Registered": bool,
    },
)


def to_dict(mime_type: MimeType) -> MimeTypeDict:
    """Return the hash form of a type.

    Args:
        mime_type (MimeType): The type to serialize.

    Returns:
        MimeTypeDict: JSON-serializable mapping.
    """
    return {
        "Content-Type": mime_type.content_type,
        "Content-Transfer-Encoding": mime_type.encoding,
        "Extensions": list(mime_type.extensions),
        "System": mime_type.system,
        "Obsolete": mime_type.obsolete,
        "Docs": mime_type.docs,
        "URL": list(mime_type.url),
        "Registered": mime_type.registered,
    }


def _normalize_key(key: object) -> str:
    return str(key).lower().replace("-", "_")


def from_dict(data: Mapping[str, Any]) -> MimeType:
    """Build a type from its hash form.

    Keys are matched case-insensitively and dashes may be replaced with
    underscores, so ``Content-Type``, ``content_type`` and ``CONTENT-TYPE`` are
    equivalent. Unknown keys are ignored.

    Args:
        data (Mapping[str, Any]): The hash form.

    Returns:
        MimeType: The new type.

    Raises:
        InvalidContentType: If the content type is missing or malformed.
        InvalidArgument: If the encoding is not a legal token, or the system
            pattern or docs are not valid strings.
    """
    norm: dict[str, Any] = {_normalize_key(k): v for k, v in data.items()}
    return MimeType(
        norm.get("content_type"),  # type: ignore[arg-type]
        extensions=norm.get("extensions"),
        encoding=norm.get("content_transfer_encoding"),
        system=norm.get("system"),
        obsolete=bool(norm.get("obsolete")),
        docs=norm.get("docs"),
        url=norm.get("url"),
        registered=norm.get("registered", True) is not False,
    )


def to_array(mime_type: MimeType) -> list[Any]:
    """Return the array form of a type.

    Args:
        mime_type (MimeType): The type to serialize.

    Returns:
        list[Any]: ``[content_type, extensions, encoding, system, obsolete, docs, url,
            registered]``.
    """
    return [
        mime_type.content_type,
        list(mime_type.extensions),
        mime_type.encoding,
        mime_type.system,
        mime_type.obsolete,
        mime_type.docs,
        list(mime_type.url),
        mime_type.registered,
    ]


def from_array(*args: Any) -> MimeType:
    """Build a type from its array form.

    The array may be passed unpacked or as a single sequence argument; only the
    content type is required:

    >> from_array("application/x-ruby", ["rb"], "8bit")
    >> from_array(["application/x-ruby", ["rb"], "8bit"])

    Args:
        *args (Any): Between one and eight array elements.

    Returns:
        MimeType: The new type.

    Raises:
        InvalidArgument: If fewer than one or more than eight elements are given.
    """
    if len(args) == 1 and isinstance(args[0], Sequence) and not isinstance(args[0], str):
        args = tuple(cast("Sequence[Any]", args[0]))
    if not 1 <= len(args) <= 8:
        raise InvalidArgument("Array provided must contain between one and eight elements.")

    values: list[Any] = [*args, *([None] * (8 - len(args)))]
    content_type, extensions, encoding, system, obsolete, docs, url, registered = values
    return MimeType(
        content_type,
        extensions=extensions,
        encoding=encoding,
        system=system,
        obsolete=bool(obsolete),
        docs=docs,
        url=url,
        registered=registered is not False,
    )


def dump_bucket(mime_types: Iterable[MimeType]) -> bytes:
    """Serialize a list of types into one bucket.

    Args:
        mime_types (Iterable[MimeType]): The bucket members, in order.

    Returns:
        bytes: UTF-8 encoded JSON array of hash forms.
    """
    payload = [to_dict(t) for t in mime_types]
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def load_bucket(data: bytes | str) -> list[MimeType]:
    """Deserialize a bucket written by `dump_bucket`.

    A bucket is trusted entirely or not at all: any decoding problem fails the
    whole bucket.

    Args:
        data (bytes | str): The stored bucket.

    Returns:
        list[MimeType]: The bucket members, in stored order.

    Raises:
        CorruptionError: If the data is not a JSON array of valid hash forms.
    """
    try:
        payload: Any = json.loads(data)
    except (UnicodeDecodeError, ValueError) as exc:
        raise CorruptionError(f"Bucket is not valid JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise CorruptionError(f"Bucket must be a JSON array, got {type(payload).__name__}")

    result: list[MimeType] = []
    for i, item in enumerate(cast("list[Any]", payload)):
        if not isinstance(item, dict):
            raise CorruptionError(f"Bucket entry {i} is not an object: {item!r}")
        try:
            result.append(from_dict(cast("dict[str, Any]", item)))
        except (InvalidContentType, InvalidArgument, TypeError) as exc:
            raise CorruptionError(f"Bucket entry {i} is invalid: {exc}") from exc
    return result
