"""Composer options and command line configuration."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "pocompose.toml"
DEFAULT_ENCODING = "utf-8"


@dataclass
class ComposeOptions:
    """Options for :func:`pocompose.compose`.

    No option is recognized yet; whatever is passed, the output stays the same.
    """


@dataclass
class ToolConfig:
    """Settings read from ``pocompose.toml``."""

    encoding: str = DEFAULT_ENCODING
    files: list[str] = field(default_factory=list)
    base_dir: Path = field(default_factory=Path.cwd)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> ToolConfig:
        """Load the config file at *path*, or ``pocompose.toml`` in the working directory."""
        if path is None:
            path = Path.cwd() / CONFIG_FILENAME
        if not path.exists():
            logger.debug("no config file at %s", path)
            return cls(base_dir=path.parent)

        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            logger.warning("ignoring invalid config file %s: %s", path, exc)
            return cls(base_dir=path.parent)

        encoding = data.get("encoding", DEFAULT_ENCODING)
        if not isinstance(encoding, str):
            raise ValueError(f"{path}: 'encoding' must be a string")

        files = data.get("files", [])
        if not isinstance(files, list) or not all(isinstance(item, str) for item in files):
            raise ValueError(f"{path}: 'files' must be a list of glob patterns")

        return cls(encoding=encoding, files=files, base_dir=path.parent)

    def resolve_files(self) -> list[Path]:
        """Expand the ``files`` patterns relative to the config directory."""
        found: list[Path] = []
        for pattern in self.files:
            matches = sorted(self.base_dir.glob(pattern))
            if not matches:
                logger.warning("pattern matched no files: %s", pattern)
            for match in matches:
                if match not in found:
                    found.append(match)
        return found
