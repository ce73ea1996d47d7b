"""In-memory representation of a PO catalog."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple, Union

Reference = Union[str, Tuple[str, int]]
Segments = Union[str, Sequence[str]]


def _segments(value: Segments, name: str) -> list[str]:
    """Wrap a plain string as a single segment and reject empty sequences."""
    if isinstance(value, str):
        return [value]
    segments = list(value)
    if not segments:
        raise ValueError(f"{name} needs at least one segment")
    return segments


def _optional_segments(value: Optional[Segments], name: str) -> Optional[list[str]]:
    if value is None:
        return None
    return _segments(value, name)


@dataclass
class Singular:
    """A translation with one source string and one translated string."""

    msgid: list[str]
    msgstr: list[str]
    comments: list[str] = field(default_factory=list)
    extracted_comments: list[str] = field(default_factory=list)
    flags: list[list[str]] = field(default_factory=list)
    references: list[list[Reference]] = field(default_factory=list)
    previous_msgids: list[str] = field(default_factory=list)
    msgctxt: Optional[list[str]] = None
    obsolete: bool = False

    def __post_init__(self) -> None:
        self.msgid = _segments(self.msgid, "msgid")
        self.msgstr = _segments(self.msgstr, "msgstr")
        self.msgctxt = _optional_segments(self.msgctxt, "msgctxt")


@dataclass
class Plural:
    """A translation with singular/plural source strings and indexed msgstrs.

    ``msgstr`` holds ``(plural_index, segments)`` pairs in output order. A
    mapping of index to segments is accepted as well.
    """

    msgid: list[str]
    msgid_plural: list[str]
    msgstr: list[tuple[int, list[str]]]
    comments: list[str] = field(default_factory=list)
    extracted_comments: list[str] = field(default_factory=list)
    flags: list[list[str]] = field(default_factory=list)
    references: list[list[Reference]] = field(default_factory=list)
    previous_msgids: list[str] = field(default_factory=list)
    msgctxt: Optional[list[str]] = None
    obsolete: bool = False

    def __post_init__(self) -> None:
        self.msgid = _segments(self.msgid, "msgid")
        self.msgid_plural = _segments(self.msgid_plural, "msgid_plural")
        self.msgctxt = _optional_segments(self.msgctxt, "msgctxt")

        pairs = self.msgstr.items() if isinstance(self.msgstr, Mapping) else self.msgstr
        msgstr = []
        for plural_form, strings in pairs:
            if plural_form < 0:
                raise ValueError(f"plural index must not be negative: {plural_form}")
            msgstr.append((plural_form, _segments(strings, f"msgstr[{plural_form}]")))
        if not msgstr:
            raise ValueError("msgstr needs at least one plural form")
        self.msgstr = msgstr


Entry = Union[Singular, Plural]


@dataclass
class Catalog:
    """Headers and entries of one PO/POT file.

    ``headers`` are the raw header lines (the msgstr of the ``msgid ""``
    entry) and ``top_comments`` the free comments placed above it.
    """

    headers: list[str] = field(default_factory=list)
    entries: list[Entry] = field(default_factory=list)
    top_comments: list[str] = field(default_factory=list)

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
