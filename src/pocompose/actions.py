from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, TextIO

import polib

from . import loader
from .composer import compose, dumps
from .config import DEFAULT_ENCODING

logger = logging.getLogger(__name__)


def format_file(
    path: Path,
    *,
    encoding: str = DEFAULT_ENCODING,
    check: bool = False,
    allow_lossy: bool = False,
) -> bool:
    """Rewrite *path* in composed form.

    Returns True when the composed text differs from what is on disk. With
    *check* set the file is left untouched.

    Raises ValueError, leaving the file alone, when composing would drop data
    (unless *allow_lossy* is set) or when the composed text does not read
    back to the same messages.
    """
    po = loader.load_polib(path, encoding=encoding)
    dropped = loader.dropped_fields(po)
    if dropped and not allow_lossy:
        raise ValueError(
            "composing would drop {dropped} (pass --allow-lossy to accept)".format(
                dropped="; ".join(dropped)
            )
        )

    composed = dumps(loader.catalog_from_polib(po))
    _verify_messages(po, composed)

    current = path.read_bytes().decode(encoding)
    if composed == current:
        logger.info("unchanged: %s", path)
        return False
    if not check:
        with path.open("w", encoding=encoding, newline="\n") as fp:
            fp.write(composed)
    return True


def _message_keys(po: polib.POFile) -> list[tuple]:
    return [
        (
            entry.msgctxt,
            entry.msgid,
            entry.msgid_plural,
            entry.msgstr,
            dict(entry.msgstr_plural),
            bool(entry.obsolete),
        )
        for entry in po
    ]


def _verify_messages(po: polib.POFile, composed: str) -> None:
    """Check that *composed* reads back to the messages and metadata of *po*."""
    if not composed:
        return
    reread = polib.pofile(composed)
    if reread.metadata != po.metadata:
        raise ValueError("composed text does not read back to the same headers")
    for index, (before, after) in enumerate(zip(_message_keys(po), _message_keys(reread))):
        if before != after:
            raise ValueError(
                f"composed text changes entry {index} ({before[1]!r} reads back as {after[1]!r});"
                " strings with backslashes are not escaped"
            )
    if len(po) != len(reread):
        raise ValueError("composed text does not read back to the same number of entries")


def _format_files(
    paths: Iterable[Path],
    failed: list[Path],
    *,
    encoding: str,
    check: bool,
    allow_lossy: bool = False,
) -> Iterator[str]:
    """Format each file, yielding one status line per changed file and a summary.

    Files that cannot be read, parsed or safely composed are logged and
    appended to *failed*.
    """
    label = "would reformat" if check else "formatted"
    processed = 0
    changed = 0

    for path in paths:
        try:
            is_changed = format_file(
                path, encoding=encoding, check=check, allow_lossy=allow_lossy
            )
        except (OSError, ValueError) as exc:
            logger.error("%s: %s", path, exc)
            failed.append(path)
            continue
        processed += 1
        if is_changed:
            changed += 1
            yield f"{label}: {path}"

    yield "Summary: {count} files | {label}={changed}, failed={failed}".format(
        count=processed,
        label=label.replace(" ", "-"),
        changed=changed,
        failed=len(failed),
    )


def cat_file(path: Path, out: TextIO, *, encoding: str = DEFAULT_ENCODING) -> None:
    """Stream the composed text of *path* to *out*."""
    catalog = loader.pofile(path, encoding=encoding)
    out.writelines(compose(catalog))
