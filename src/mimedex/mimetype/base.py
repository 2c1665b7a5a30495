# topmark:header:start
#
#   project      : Mimedex
#   file         : base.py
#   file_relpath : src/mimedex/mimetype/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The `MimeType` value describing one MIME content type.

A `MimeType` is built from a ``media/sub`` content type string and then
configured through its setters (extensions, encoding, system pattern, docs...)
or, equivalently, through keyword arguments on construction. Once handed to a
[`Registry`][mimedex.registry.Registry] it is treated as immutable.

Unofficial (not IANA-registered) types are conventionally marked with an
``x-`` prefix on either segment. The *simplified* form of a content type drops
those markers and lowercases the result; it is the grouping key used by the
registry and the persistent index:

    text/plain        => text/plain
    x-chemical/x-pdb  => chemical/pdb
"""

from __future__ import annotations

import re
import sys
from collections.abc import Iterable
from functools import total_ordering
from typing import TYPE_CHECKING, Any, Final

from mimedex.errors import InvalidArgument, InvalidContentType

if TYPE_CHECKING:
    from collections.abc import Iterator

MEDIA_TYPE_RE: Final[re.Pattern[str]] = re.compile(r"([-\w.+]+)/([-\w.+]*)")
UNREG_RE: Final[re.Pattern[str]] = re.compile(r"^(?:[Xx]-)+")
USE_INSTEAD_RE: Final[re.Pattern[str]] = re.compile(r"use-instead:([-\w.+]+)/([-\w.+]*)")

ENCODINGS: Final[tuple[str, ...]] = ("base64", "7bit", "8bit", "quoted-printable")
DEFAULT_ENCODING: Final[str] = "default"

TEXT: Final[str] = "text"
QUOTED_PRINTABLE: Final[str] = "quoted-printable"
BASE64: Final[str] = "base64"

SIGNATURES: Final[frozenset[str]] = frozenset(
    {
        "application/pgp-keys",
        "application/pgp",
        "application/pgp-signature",
        "application/pkcs10",
        "application/pkcs7-mime",
        "application/pkcs7-signature",
        "text/vcard",
    }
)

IANA_URL: Final[str] = "http://www.iana.org/assignments/media-types/{}/{}"
RFC_URL: Final[str] = "http://rfc-editor.org/rfc/rfc{}.txt"
DRAFT_URL: Final[str] = (
    "http://datatracker.ietf.org/public/idindex.cgi?command=id_details&filename={}"
)
LTSW_URL: Final[str] = "http://www.ltsw.se/knbase/internet/{}.htp"
CONTACT_URL: Final[str] = "http://www.iana.org/assignments/contact-people.htm#{}"

_RFC_TOKEN_RE: Final[re.Pattern[str]] = re.compile(r"RFC(\d+)")
_DRAFT_TOKEN_RE: Final[re.Pattern[str]] = re.compile(r"DRAFT:(.+)")
_NAMED_URL_RE: Final[re.Pattern[str]] = re.compile(r"\{([^=]+)=([^}]+)\}")
_NAMED_CONTACT_RE: Final[re.Pattern[str]] = re.compile(r"\[([^=]+)=([^\]]+)\]")
_CONTACT_RE: Final[re.Pattern[str]] = re.compile(r"\[([^\]]+)\]")


def _strip_marker(segment: str) -> str:
    lowered = segment.lower()
    # A segment made only of markers is kept as is, so it never becomes empty.
    return UNREG_RE.sub("", lowered) or lowered


def simplified(content_type: str) -> str | None:
    """Return the simplified form of a content type.

    Leading ``x-`` markers are stripped from both segments (a segment made
    only of markers keeps them) and the result is lowercased. Anything after the ``media/sub`` prefix (e.g. parameters such
    as ``; charset=utf-8``) is ignored. The function is idempotent.

    Args:
        content_type (str): A content type such as ``"application/x-Ruby"``.

    Returns:
        str | None: The simplified type (``"application/ruby"``), or None if
            the input does not start with ``media/sub``.
    """
    match = MEDIA_TYPE_RE.match(content_type)
    if match is None:
        return None
    media, sub = match.groups()
    return f"{_strip_marker(media)}/{_strip_marker(sub)}"


def _flatten(value: object) -> Iterator[object]:
    if value is None:
        return
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        yield value
        return
    for item in value:
        yield from _flatten(item)


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


@total_ordering
class MimeType:
    """A MIME content type and everything known about it.

    Args:
        content_type (str): The content type, ``media/sub``; case is preserved.
        extensions (object): Extensions (scalar or nested iterables); see
            [`extensions`][mimedex.mimetype.MimeType.extensions].
        encoding (str | None): Transfer encoding token or ``None``/``"default"``.
        system (str | re.Pattern[str] | None): Platform restriction pattern.
        obsolete (bool): Whether the type is obsolete.
        docs (str | None): Documentation text; may carry ``use-instead:`` hints.
        url (str | Iterable[str] | None): Encoded URL tokens.
        registered (bool): Registration flag; overridden by ``x-`` markers.

    Raises:
        InvalidContentType: If ``content_type`` is not a ``media/sub`` string.
        InvalidArgument: If the encoding, system pattern or docs are invalid.

    Note:
        Types compare equal to strings they are [`like`][mimedex.mimetype.MimeType.like],
        but hash on their own key. Do not mix `MimeType` and `str` keys in one
        set or dict.
    """

    __slots__ = (
        "_content_type",
        "_raw_media_type",
        "_raw_sub_type",
        "_simplified",
        "_media_type",
        "_sub_type",
        "_extensions",
        "_encoding",
        "_system",
        "_obsolete",
        "_docs",
        "_use_instead",
        "_url",
        "_registered",
    )

    def __init__(
        self,
        content_type: str,
        *,
        extensions: object = None,
        encoding: str | None = None,
        system: str | re.Pattern[str] | None = None,
        obsolete: bool = False,
        docs: str | None = None,
        url: str | Iterable[str] | None = None,
        registered: bool = True,
    ) -> None:
        if not isinstance(content_type, str):
            raise InvalidContentType(content_type)
        match = MEDIA_TYPE_RE.fullmatch(content_type)
        if match is None:
            raise InvalidContentType(content_type)

        self._content_type: str = content_type
        self._raw_media_type: str = match.group(1)
        self._raw_sub_type: str = match.group(2)
        self._media_type: str = sys.intern(_strip_marker(self._raw_media_type))
        self._sub_type: str = sys.intern(_strip_marker(self._raw_sub_type))
        self._simplified: str = sys.intern(f"{self._media_type}/{self._sub_type}")

        self._extensions: list[str] = []
        self._encoding: str = self.default_encoding
        self._system: str | None = None
        self._obsolete: bool = False
        self._docs: str | None = None
        self._use_instead: list[str] | None = None
        self._url: list[str] = []
        self._registered: bool = True

        self.extensions = extensions
        self.encoding = encoding
        self.system = system
        self.obsolete = obsolete
        self.docs = docs
        self.url = url
        self.registered = registered

    # --- identity -----------------------------------------------------------

    @property
    def content_type(self) -> str:
        """The whole content type, as given (``x-chemical/x-pdb``)."""
        return self._content_type

    @property
    def raw_media_type(self) -> str:
        """The media type as given (``x-chemical``)."""
        return self._raw_media_type

    @property
    def raw_sub_type(self) -> str:
        """The sub type as given (``x-pdb``)."""
        return self._raw_sub_type

    @property
    def simplified(self) -> str:
        """The simplified content type (``chemical/pdb``)."""
        return self._simplified

    @property
    def media_type(self) -> str:
        """The media type of the simplified content type (``chemical``)."""
        return self._media_type

    @property
    def sub_type(self) -> str:
        """The sub type of the simplified content type (``pdb``)."""
        return self._sub_type

    # --- configurable attributes -------------------------------------------

    @property
    def extensions(self) -> list[str]:
        """Extensions known to be used for this type.

        The setter accepts ``None``, a single string, or (nested) iterables of
        strings. Values are flattened, lowercased and de-duplicated, keeping
        the first occurrence order. Empty strings are dropped.
        """
        return self._extensions

    @extensions.setter
    def extensions(self, value: object) -> None:
        seen: dict[str, None] = {}
        for item in _flatten(value):
            if item is None:
                continue
            ext = str(item).lower()
            if ext:
                seen.setdefault(sys.intern(ext), None)
        self._extensions = list(seen)

    @property
    def default_encoding(self) -> str:
        """``quoted-printable`` for ``text`` media types, ``base64`` otherwise."""
        return QUOTED_PRINTABLE if self._media_type == TEXT else BASE64

    @property
    def encoding(self) -> str:
        """Transfer encoding (``base64``, ``7bit``, ``8bit`` or ``quoted-printable``).

        Setting ``None`` or ``"default"`` resets it to
        [`default_encoding`][mimedex.mimetype.MimeType.default_encoding].

        Raises:
            InvalidArgument: When set to any other value.
        """
        return self._encoding

    @encoding.setter
    def encoding(self, value: str | None) -> None:
        if value is None or value == DEFAULT_ENCODING:
            self._encoding = self.default_encoding
        elif value in ENCODINGS:
            self._encoding = sys.intern(value)
        else:
            raise InvalidArgument(
                f"The encoding must be None, 'default', {', '.join(ENCODINGS)} (got {value!r})."
            )

    @property
    def system(self) -> str | None:
        """Regular expression restricting the type to matching platforms, if any.

        Raises:
            InvalidArgument: When set to something that is not a valid pattern.
        """
        return self._system

    @system.setter
    def system(self, value: str | re.Pattern[str] | None) -> None:
        if isinstance(value, re.Pattern):
            value = value.pattern
        if not value:
            self._system = None
            return
        if not isinstance(value, str):
            raise InvalidArgument(f"The system must be a pattern string (got {value!r}).")
        try:
            re.compile(value)
        except re.error as exc:
            raise InvalidArgument(f"Invalid system pattern {value!r}: {exc}") from exc
        self._system = value

    @property
    def obsolete(self) -> bool:
        """Whether the type is obsolete."""
        return self._obsolete

    @obsolete.setter
    def obsolete(self, value: object) -> None:
        self._obsolete = bool(value)

    @property
    def docs(self) -> str | None:
        """Documentation text; ``use-instead:media/sub`` hints populate `use_instead`."""
        return self._docs

    @docs.setter
    def docs(self, value: str | None) -> None:
        if value is not None and not isinstance(value, str):
            raise InvalidArgument(f"The docs must be a string (got {value!r}).")
        self._docs = value or None
        hints = USE_INSTEAD_RE.findall(value) if value else []
        self._use_instead = [sys.intern(f"{m}/{s}") for m, s in hints] or None

    @property
    def use_instead(self) -> list[str] | None:
        """Replacement types for an obsolete type; None when current or unknown."""
        if not self._obsolete:
            return None
        return self._use_instead

    @property
    def url(self) -> list[str]:
        """Encoded URL tokens (see [`urls`][mimedex.mimetype.MimeType.urls])."""
        return self._url

    @url.setter
    def url(self, value: str | Iterable[str] | None) -> None:
        self._url = [str(u) for u in _flatten(value) if u is not None]

    @property
    def registered(self) -> bool:
        """Whether the type is registered.

        Always False when either raw segment starts with ``x-``, regardless of
        the stored flag.
        """
        if UNREG_RE.match(self._raw_media_type) or UNREG_RE.match(self._raw_sub_type):
            return False
        return self._registered

    @registered.setter
    def registered(self, value: object) -> None:
        self._registered = bool(value)

    @property
    def urls(self) -> list[str | tuple[str, str]]:
        """Decoded URL list.

        * ``IANA`` -> the IANA assignment page of this type
        * ``RFCnnn`` -> the RFC text
        * ``DRAFT:name`` -> the IETF datatracker entry
        * ``LTSW`` -> the LTSW page of the media type
        * ``{name=url}`` -> ``(name, url)``
        * ``[name=token]`` -> ``(name, contact url)``
        * ``[token]`` -> the IANA contact url
        * anything else is returned unchanged
        """
        decoded: list[str | tuple[str, str]] = []
        for token in self._url:
            if token == "IANA":
                decoded.append(IANA_URL.format(self._media_type, self._sub_type))
            elif token == "LTSW":
                decoded.append(LTSW_URL.format(self._media_type))
            elif m := _RFC_TOKEN_RE.fullmatch(token):
                decoded.append(RFC_URL.format(m.group(1)))
            elif m := _DRAFT_TOKEN_RE.fullmatch(token):
                decoded.append(DRAFT_URL.format(m.group(1)))
            elif m := _NAMED_URL_RE.match(token):
                decoded.append((m.group(1), m.group(2)))
            elif m := _NAMED_CONTACT_RE.match(token):
                decoded.append((m.group(1), CONTACT_URL.format(m.group(2))))
            elif m := _CONTACT_RE.match(token):
                decoded.append(CONTACT_URL.format(m.group(1)))
            else:
                decoded.append(token)
        return decoded

    # --- predicates ---------------------------------------------------------

    def is_complete(self) -> bool:
        """Return True when at least one extension is known."""
        return bool(self._extensions)

    def is_system(self) -> bool:
        """Return True when the type is restricted to some platforms."""
        return self._system is not None

    def is_platform(self, platform: str) -> bool:
        """Return True when the type is restricted to platforms matching ``platform``.

        Args:
            platform (str): Platform identifier, e.g. ``sys.platform``.

        Returns:
            bool: True if a system pattern is set and matches ``platform``.
        """
        if self._system is None or not platform:
            return False
        return re.search(self._system, platform) is not None

    def is_obsolete(self) -> bool:
        """Return True when the type is obsolete."""
        return self._obsolete

    def is_binary(self) -> bool:
        """Return True when the type is transported as ``base64``."""
        return self._encoding == BASE64

    def is_ascii(self) -> bool:
        """Return True when the type is not transported as ``base64``."""
        return not self.is_binary()

    def is_signature(self) -> bool:
        """Return True when the type is a known digital signature type."""
        return self._simplified in SIGNATURES

    def like(self, other: MimeType | str) -> bool:
        """Return True when ``other`` has the same simplified type.

        Args:
            other (MimeType | str): Another type or a content type string.

        Returns:
            bool: Whether both simplify to the same type.
        """
        if isinstance(other, MimeType):
            return self._simplified == other.simplified
        return self._simplified == simplified(other)

    # --- ordering -----------------------------------------------------------

    def priority_compare(self, other: MimeType) -> int:
        """Compare by reliability, best first.

        1. Simplified types are compared; a difference decides.
        2. Registered before unregistered.
        3. Generic before platform-specific.
        4. Complete before incomplete.
        5. Current before obsolete.
        6. Obsolete types naming a replacement before those that do not;
           replacement lists are compared when both have one.

        Args:
            other (MimeType): The type to compare with.

        Returns:
            int: -1, 0 or 1.
        """
        pc = _cmp(self._simplified, other.simplified)
        if pc:
            return pc
        if self.registered != other.registered:
            return -1 if self.registered else 1
        if self.is_system() != other.is_system():
            return 1 if self.is_system() else -1
        if self.is_complete() != other.is_complete():
            return -1 if self.is_complete() else 1
        if self._obsolete != other.is_obsolete():
            return 1 if self._obsolete else -1
        mine, theirs = self.use_instead, other.use_instead
        if self._obsolete and mine != theirs:
            if theirs is None:
                return -1
            if mine is None:
                return 1
            return _cmp(mine, theirs)
        return 0

    def _sort_key(self) -> tuple[str, str]:
        return (self._simplified, self._content_type.lower())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MimeType):
            return self._sort_key() == other._sort_key()
        if isinstance(other, str):
            return self.like(other)
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, MimeType):
            return self._sort_key() < other._sort_key()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._sort_key())

    # --- conversions --------------------------------------------------------

    def copy(self) -> MimeType:
        """Return an independent copy of this type."""
        return MimeType(
            self._content_type,
            extensions=list(self._extensions),
            encoding=self._encoding,
            system=self._system,
            obsolete=self._obsolete,
            docs=self._docs,
            url=list(self._url),
            registered=self._registered,
        )

    def same_as(self, other: MimeType) -> bool:
        """Return True when every attribute of ``other`` equals this type's.

        Unlike ``==``, which compares the content types only, this compares
        the full value (extensions, encoding, system, flags, docs and urls).
        """
        return (
            self._content_type == other.content_type
            and self._extensions == other.extensions
            and self._encoding == other.encoding
            and self._system == other.system
            and self._obsolete == other.obsolete
            and self._docs == other.docs
            and self._url == other.url
            and self.registered == other.registered
        )

    def __str__(self) -> str:
        return self._content_type

    def __repr__(self) -> str:
        return f"<MimeType {self._content_type!r}>"
