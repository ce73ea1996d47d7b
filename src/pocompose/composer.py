"""Compose ``.po`` / ``.pot`` text from a :class:`~pocompose.catalog.Catalog`.

:func:`compose` returns the text as a lazy sequence of string fragments which
can be written out one by one or joined::

    catalog = Catalog(
        headers=["Last-Translator: Jane Doe"],
        entries=[Singular(msgid=["foo"], msgstr=["bar"], comments=["A comment"])],
    )
    with open("messages.po", "w", encoding="utf-8", newline="\\n") as f:
        f.writelines(compose(catalog))

produces::

    msgid ""
    msgstr ""
    "Last-Translator: Jane Doe"

    # A comment
    msgid "foo"
    msgstr "bar"
"""

from __future__ import annotations

import os
from typing import Any, Iterable, Iterator, Optional, Sequence, TextIO

from .catalog import Catalog, Entry, Plural, Reference, Singular
from .config import DEFAULT_ENCODING
from .meta import inject_meta_headers

OBSOLETE_PREFIX = "#~ "

# Backslashes are left alone; the reading side has to agree on that.
_ESCAPES = str.maketrans({
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
})


def escape(text: str) -> str:
    """Return *text* as it goes between the quotes of a PO string literal."""
    return text.translate(_ESCAPES)


def compose(catalog: Catalog, options: Any = None) -> Iterator[str]:
    """Yield the PO text of *catalog* fragment by fragment.

    The header entry comes first, then the entries in catalog order, with a
    blank line between consecutive entries. *options* is usually a
    :class:`~pocompose.config.ComposeOptions`; no value changes the output.
    """
    entries = inject_meta_headers(catalog.headers, catalog.top_comments, catalog.entries)
    for index, entry in enumerate(entries):
        if index:
            yield "\n"
        yield from _dump_entry(entry)


def dumps(catalog: Catalog, options: Any = None) -> str:
    return "".join(compose(catalog, options))


def dump(catalog: Catalog, fp: TextIO, options: Any = None) -> None:
    """Write *catalog* to the text stream *fp* without building the whole string."""
    fp.writelines(compose(catalog, options))


def save(
    catalog: Catalog,
    path: str | os.PathLike[str],
    *,
    encoding: str = DEFAULT_ENCODING,
    options: Any = None,
) -> None:
    # Always LF, whatever the platform default is.
    with open(path, "w", encoding=encoding, newline="\n") as fp:
        dump(catalog, fp, options)


# ======= Entries =======
def _dump_entry(entry: Entry) -> Iterator[str]:
    if isinstance(entry, Singular):
        yield from _dump_prefix(entry)
        yield from _dump_msgctxt(entry.msgctxt, entry.obsolete)
        yield from _dump_kw_and_strings("msgid", entry.msgid, entry.obsolete)
        yield from _dump_kw_and_strings("msgstr", entry.msgstr, entry.obsolete)
    elif isinstance(entry, Plural):
        yield from _dump_prefix(entry)
        yield from _dump_msgctxt(entry.msgctxt, entry.obsolete)
        yield from _dump_kw_and_strings("msgid", entry.msgid, entry.obsolete)
        yield from _dump_kw_and_strings("msgid_plural", entry.msgid_plural, entry.obsolete)
        yield from _dump_plural_msgstr(entry.msgstr, entry.obsolete)
    else:
        raise TypeError(f"cannot compose entry of type {type(entry).__name__}")


def _dump_prefix(entry: Entry) -> Iterator[str]:
    """Comment, flag, reference and previous msgid lines, which are never obsolete-prefixed."""
    yield from _dump_comments(entry.comments)
    yield from _dump_extracted_comments(entry.extracted_comments)
    yield from _dump_flags(entry.flags)
    yield from _dump_references(entry.references)
    yield from _dump_previous_msgids(entry.previous_msgids)


# ======= Fields =======
def _dump_comments(comments: Iterable[str]) -> Iterator[str]:
    # The prefix is fixed, so an empty comment comes out as "# ".
    for comment in comments:
        yield "# "
        yield comment
        yield "\n"


def _dump_extracted_comments(comments: Iterable[str]) -> Iterator[str]:
    for comment in comments:
        yield "#. "
        yield comment
        yield "\n"


def _dump_references(references: Iterable[Sequence[Reference]]) -> Iterator[str]:
    for reference_line in references:
        yield "#: "
        yield ", ".join(_dump_reference_file(reference) for reference in reference_line)
        yield "\n"


def _dump_reference_file(reference: Reference) -> str:
    if isinstance(reference, str):
        return reference
    file, line = reference
    return f"{file}:{line}"


def _dump_flags(flags: Iterable[Sequence[str]]) -> Iterator[str]:
    for flag_line in flags:
        yield "#, "
        yield ", ".join(flag_line)
        yield "\n"


def _dump_previous_msgids(previous_msgids: Iterable[str]) -> Iterator[str]:
    for previous_msgid in previous_msgids:
        yield "#| "
        yield from _dump_kw_and_strings("msgid", [previous_msgid])


def _dump_msgctxt(msgctxt: Optional[Sequence[str]], obsolete: bool) -> Iterator[str]:
    if msgctxt is None:
        return
    yield from _dump_kw_and_strings("msgctxt", msgctxt, obsolete)


def _dump_plural_msgstr(
    msgstr: Iterable[tuple[int, Sequence[str]]], obsolete: bool
) -> Iterator[str]:
    for plural_form, strings in msgstr:
        yield from _dump_kw_and_strings(f"msgstr[{plural_form}]", strings, obsolete)


def _dump_kw_and_strings(
    keyword: str, strings: Sequence[str], obsolete: bool = False
) -> Iterator[str]:
    """Keyword line with the first segment, then one quoted line per further segment."""
    first, *rest = strings
    if obsolete:
        yield OBSOLETE_PREFIX
    yield keyword
    yield ' "'
    yield escape(first)
    yield '"'
    yield "\n"

    for string in rest:
        if obsolete:
            yield OBSOLETE_PREFIX
        yield '"'
        yield escape(string)
        yield '"'
        yield "\n"
