"""Loading of YAML or JSON documents from disk."""

from __future__ import annotations

from typing import TYPE_CHECKING

import yaml

if TYPE_CHECKING:
    from pathlib import Path


class ManifestError(ValueError):
    """Raised when an input document cannot be read or understood."""


def load_document(path: Path) -> object:
    """Return the single YAML (or JSON) document stored at ``path``."""

    try:
        with path.open(encoding="utf-8") as handle:
            return yaml.safe_load(handle)
    except OSError as exc:
        raise ManifestError(f"Cannot read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ManifestError(f"Cannot parse {path}: {exc}") from exc
