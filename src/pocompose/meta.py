from __future__ import annotations

from itertools import chain
from typing import Iterable, Iterator, Sequence

from .catalog import Entry, Singular


def header_entry(headers: Sequence[str], top_comments: Sequence[str] = ()) -> Singular:
    """Build the ``msgid ""`` entry that carries the catalog headers.

    The msgstr starts with an empty segment so every header lands on its own
    continuation line.
    """
    return Singular(msgid=[""], msgstr=[""] + list(headers), comments=list(top_comments))


def inject_meta_headers(
    headers: Sequence[str],
    top_comments: Sequence[str],
    entries: Iterable[Entry],
) -> Iterator[Entry]:
    """Yield the header entry (when there is anything to put in it) followed by *entries*."""
    if not headers and not top_comments:
        return iter(entries)
    return chain([header_entry(headers, top_comments)], entries)
