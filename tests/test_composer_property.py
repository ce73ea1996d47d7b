import re
import string

import polib
from hypothesis import given, settings, strategies as st

from pocompose import Catalog, Plural, Singular, compose, dumps, escape

SAFE_TEXT_CHARS = string.ascii_letters + string.digits + " ._-/%{}:;,!?#" + "äöüß€日本語"
SPECIAL_CHARS = '"\n\t\r'
TEXT_CHARS = SAFE_TEXT_CHARS + SPECIAL_CHARS
COMMENT_CHARS = SAFE_TEXT_CHARS

_UNESCAPES = {'"': '"', "n": "\n", "t": "\t", "r": "\r"}

texts = st.text(alphabet=TEXT_CHARS, max_size=20)
non_empty_texts = st.text(alphabet=TEXT_CHARS, min_size=1, max_size=20)
segments = st.lists(texts, min_size=1, max_size=3)
comments = st.lists(st.text(alphabet=COMMENT_CHARS, min_size=1, max_size=15), max_size=2)
flag_groups = st.lists(
    st.lists(st.text(alphabet=string.ascii_lowercase + "-", min_size=1, max_size=10), min_size=1, max_size=3),
    max_size=2,
)
references = st.lists(
    st.lists(
        st.one_of(
            st.text(alphabet=string.ascii_lowercase + "./", min_size=1, max_size=10),
            st.tuples(
                st.text(alphabet=string.ascii_lowercase + "./", min_size=1, max_size=10),
                st.integers(min_value=1, max_value=9999),
            ),
        ),
        min_size=1,
        max_size=3,
    ),
    max_size=2,
)


def _unescape(text: str) -> str:
    return re.sub(r'\\(["ntr])', lambda m: _UNESCAPES[m.group(1)], text)


@st.composite
def singular_entries(draw, obsolete=st.booleans()):
    return Singular(
        msgid=draw(segments),
        msgstr=draw(segments),
        comments=draw(comments),
        extracted_comments=draw(comments),
        flags=draw(flag_groups),
        references=draw(references),
        previous_msgids=draw(st.lists(texts, max_size=2)),
        msgctxt=draw(st.none() | segments),
        obsolete=draw(obsolete),
    )


@st.composite
def plural_entries(draw, obsolete=st.booleans()):
    forms = draw(st.lists(segments, min_size=1, max_size=3))
    return Plural(
        msgid=draw(segments),
        msgid_plural=draw(segments),
        msgstr=list(enumerate(forms)),
        comments=draw(comments),
        extracted_comments=draw(comments),
        flags=draw(flag_groups),
        references=draw(references),
        previous_msgids=draw(st.lists(texts, max_size=2)),
        msgctxt=draw(st.none() | segments),
        obsolete=draw(obsolete),
    )


entries = st.one_of(singular_entries(), plural_entries())
catalogs = st.builds(
    Catalog,
    headers=st.lists(st.text(alphabet=TEXT_CHARS, max_size=20), max_size=3),
    entries=st.lists(entries, max_size=4),
)


@settings(max_examples=100, deadline=None)
@given(text=st.text(alphabet=TEXT_CHARS, max_size=40))
def test_escape_roundtrip(text: str) -> None:
    escaped = escape(text)

    assert "\n" not in escaped
    assert "\t" not in escaped
    assert "\r" not in escaped
    assert '"' not in escaped.replace('\\"', "")
    assert _unescape(escaped) == text


@settings(max_examples=50, deadline=None)
@given(catalog=catalogs)
def test_compose_is_deterministic(catalog: Catalog) -> None:
    assert list(compose(catalog)) == list(compose(catalog))
    assert dumps(catalog) == "".join(compose(catalog))


@settings(max_examples=50, deadline=None)
@given(entry=st.one_of(singular_entries(obsolete=st.just(True)), plural_entries(obsolete=st.just(True))))
def test_obsolete_entries_prefix_keyword_lines_only(entry) -> None:
    lines = dumps(Catalog(entries=[entry])).split("\n")
    assert lines.pop() == ""

    keyword_segments = len(entry.msgid) + (len(entry.msgctxt) if entry.msgctxt else 0)
    if isinstance(entry, Plural):
        keyword_segments += len(entry.msgid_plural)
        keyword_segments += sum(len(strings) for _plural_form, strings in entry.msgstr)
    else:
        keyword_segments += len(entry.msgstr)

    obsolete_lines = [line for line in lines if line.startswith("#~ ")]
    other_lines = [line for line in lines if not line.startswith("#~ ")]

    assert len(obsolete_lines) == keyword_segments
    for line in other_lines:
        assert line.startswith(("# ", "#. ", "#, ", "#: ", "#| "))


@settings(max_examples=50, deadline=None)
@given(entry=st.one_of(singular_entries(obsolete=st.just(False)), plural_entries(obsolete=st.just(False))))
def test_active_entries_have_no_obsolete_prefix(entry) -> None:
    assert "#~" not in dumps(Catalog(entries=[entry]))


@settings(max_examples=50, deadline=None)
@given(
    items=st.lists(
        st.tuples(
            st.none() | non_empty_texts,
            non_empty_texts,
            texts,
        ),
        min_size=1,
        max_size=5,
    )
)
def test_polib_reads_back_composed_text(items) -> None:
    catalog = Catalog(
        headers=["Language: de\n", "Content-Type: text/plain; charset=UTF-8\n"],
        entries=[
            Singular(msgctxt=msgctxt, msgid=msgid, msgstr=msgstr)
            for msgctxt, msgid, msgstr in items
        ],
    )

    po = polib.pofile(dumps(catalog))

    assert po.metadata["Language"] == "de"
    assert [(entry.msgctxt, entry.msgid, entry.msgstr) for entry in po] == items


@settings(max_examples=50, deadline=None)
@given(
    msgid=segments.filter(lambda strings: "".join(strings) != ""),
    msgid_plural=segments,
    forms=st.lists(segments, min_size=1, max_size=4),
)
def test_polib_reads_back_plural_entries(msgid, msgid_plural, forms) -> None:
    catalog = Catalog(
        headers=["Plural-Forms: nplurals=2; plural=(n != 1);\n"],
        entries=[Plural(msgid=msgid, msgid_plural=msgid_plural, msgstr=list(enumerate(forms)))],
    )

    (entry,) = polib.pofile(dumps(catalog))

    assert entry.msgid == "".join(msgid)
    assert entry.msgid_plural == "".join(msgid_plural)
    assert entry.msgstr_plural == {index: "".join(strings) for index, strings in enumerate(forms)}
