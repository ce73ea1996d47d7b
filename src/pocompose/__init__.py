from .catalog import (
    Catalog,
    Entry,
    Plural,
    Reference,
    Singular,
)
from .composer import (
    compose,
    dump,
    dumps,
    escape,
    save,
)
from .config import ComposeOptions
from .loader import (
    PoBackend,
    PolibBackend,
    pofile,
    pofile_from_text,
)
from .meta import inject_meta_headers

__all__ = (
    "Catalog",
    "ComposeOptions",
    "Entry",
    "Plural",
    "PoBackend",
    "PolibBackend",
    "Reference",
    "Singular",
    "compose",
    "dump",
    "dumps",
    "escape",
    "inject_meta_headers",
    "pofile",
    "pofile_from_text",
    "save",
)
