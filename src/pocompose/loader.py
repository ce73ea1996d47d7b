from __future__ import annotations

import logging
import os
from typing import Optional, Protocol

import polib

from .catalog import Catalog, Entry, Plural, Reference, Singular
from .config import DEFAULT_ENCODING

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".po", ".pot")


class PoBackend(Protocol):
    def load_file(self, filename: str, *, encoding: str) -> Catalog:
        ...

    def load_text(self, text: str, *, encoding: str) -> Catalog:
        ...


class PolibBackend:
    """Backend that parses PO data via polib."""

    def load_file(self, filename: str, *, encoding: str) -> Catalog:
        return catalog_from_polib(polib.pofile(filename, encoding=encoding))

    def load_text(self, text: str, *, encoding: str) -> Catalog:
        return catalog_from_polib(polib.pofile(text, encoding=encoding))


def pofile(
    filename: str | os.PathLike[str],
    *,
    backend: Optional[PoBackend] = None,
    encoding: str = DEFAULT_ENCODING,
) -> Catalog:
    """Return the Catalog stored in a PO/POT file."""
    filename = os.fspath(filename)
    _validate_filename(filename)
    backend = backend or PolibBackend()
    logger.debug("loading %s", filename)
    return backend.load_file(filename, encoding=encoding)


def pofile_from_text(
    text: str,
    *,
    backend: Optional[PoBackend] = None,
    encoding: str = DEFAULT_ENCODING,
) -> Catalog:
    """Return the Catalog described by raw PO text."""
    backend = backend or PolibBackend()
    return backend.load_text(text, encoding=encoding)


def load_polib(
    filename: str | os.PathLike[str], *, encoding: str = DEFAULT_ENCODING
) -> polib.POFile:
    """Parse a PO/POT file with polib after validating its name."""
    filename = os.fspath(filename)
    _validate_filename(filename)
    return polib.pofile(filename, encoding=encoding)


def dropped_fields(po: polib.POFile) -> list[str]:
    """Describe the parts of *po* a Catalog has no place for.

    An empty list means converting *po* keeps everything a Catalog models.
    """
    dropped = []
    if po.metadata_is_fuzzy:
        dropped.append(f"header flags {po.metadata_is_fuzzy}")
    for entry in po:
        if entry.previous_msgctxt:
            dropped.append(f"previous msgctxt of {entry.msgid!r}")
        if entry.previous_msgid_plural:
            dropped.append(f"previous msgid_plural of {entry.msgid!r}")
    return dropped


def catalog_from_polib(po: polib.POFile) -> Catalog:
    """Convert a parsed polib file, header entry included, into a Catalog.

    Whatever :func:`dropped_fields` reports is left out.
    """
    headers = [f"{key}: {value}\n" for key, value in po.metadata.items()]
    top_comments = po.header.split("\n") if po.header else []
    for description in dropped_fields(po):
        logger.warning("dropping %s", description)

    return Catalog(
        headers=headers,
        entries=[entry_from_polib(entry) for entry in po],
        top_comments=top_comments,
    )


def entry_from_polib(entry: polib.POEntry) -> Entry:
    fields = dict(
        comments=entry.tcomment.split("\n") if entry.tcomment else [],
        extracted_comments=entry.comment.split("\n") if entry.comment else [],
        flags=[list(entry.flags)] if entry.flags else [],
        references=[_references(entry.occurrences)] if entry.occurrences else [],
        previous_msgids=[entry.previous_msgid] if entry.previous_msgid else [],
        msgctxt=None if entry.msgctxt is None else split_segments(entry.msgctxt),
        obsolete=bool(entry.obsolete),
    )

    if entry.msgid_plural:
        return Plural(
            msgid=split_segments(entry.msgid),
            msgid_plural=split_segments(entry.msgid_plural),
            msgstr=[
                (int(plural_form), split_segments(text))
                for plural_form, text in entry.msgstr_plural.items()
            ],
            **fields,
        )
    return Singular(
        msgid=split_segments(entry.msgid),
        msgstr=split_segments(entry.msgstr),
        **fields,
    )


def split_segments(text: str) -> list[str]:
    """Split a string the way gettext wraps multi-line strings.

    ``"a\\nb"`` becomes ``["", "a\\n", "b"]``; single-line strings stay as one
    segment.
    """
    pieces = text.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    if len(lines) <= 1:
        return [text]
    return [""] + lines


def _references(occurrences: list[tuple[str, str]]) -> list[Reference]:
    references: list[Reference] = []
    for file, line in occurrences:
        # polib splits '#:' lines on whitespace only, so "a.py:3, b.py"
        # comes back as ("a.py:3,", "") and ("b.py", "").
        if not line and file.endswith(","):
            file, _, line = file.rstrip(",").rpartition(":")
            if not file or not line.isdigit():
                file, line = file + (":" if file else "") + line, ""
        line = line.rstrip(",")
        if line.isdigit():
            references.append((file, int(line)))
        elif line:
            references.append(f"{file}:{line}")
        else:
            references.append(file)
    return references


def _validate_filename(filename: str) -> bool:
    if not filename:
        raise ValueError("File path cannot be empty")

    if not os.path.exists(filename):
        raise FileNotFoundError(f"File not found: {filename}")

    if not filename.endswith(SUPPORTED_SUFFIXES):
        raise ValueError(f"File type not supported: {filename}")

    return True
