"""Translation preview for report rows."""

from __future__ import annotations

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

from .loaders import DEFAULT_EXTENSIONS, LocaleLoader, list_locale_files

logger = logging.getLogger(__name__)


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged = deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = deepcopy(value)
    return merged


def build_catalogue(
    sprinkles: Mapping[str, Path],
    locale: str,
    loader: LocaleLoader | None = None,
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
) -> dict[str, Any]:
    """Merge every *locale* file of every sprinkle; later sprinkles win."""

    loader = loader or LocaleLoader(sprinkles)
    catalogue: dict[str, Any] = {}
    for name, directory in sprinkles.items():
        for relative_path in list_locale_files(directory, locale, extensions):
            document = loader.document(locale, name, relative_path)
            logger.debug(
                "Merging %s preview strings from %s/%s",
                document.locale_id,
                document.sprinkle_id,
                document.relative_path,
            )
            catalogue = _deep_merge(catalogue, document.content)
    return catalogue


def _child(node: Any, piece: str) -> Any:
    # Flattened paths stringify mapping keys and list indexes alike.
    if isinstance(node, Mapping):
        if piece in node:
            return node[piece]
        return node.get(int(piece)) if piece.isdigit() else None
    if isinstance(node, (list, tuple)) and piece.isdigit():
        index = int(piece)
        return node[index] if index < len(node) else None
    return None


def _lookup(catalogue: Mapping[str, Any], key: str) -> str | None:
    cursor: Any = catalogue
    for piece in key.split("."):
        cursor = _child(cursor, piece)
        if cursor is None:
            return None
    return cursor if isinstance(cursor, str) else None


class Translator:
    """Look up messages by dotted key in a merged catalogue."""

    def __init__(self, catalogue: Mapping[str, Any]) -> None:
        self.catalogue = catalogue

    def translate(self, key: str) -> str:
        """Return the message for *key*, or *key* itself when there is none."""

        message = _lookup(self.catalogue, key)
        return message if message is not None else key

    def preview(self, key: str, max_length: int = 255) -> str:
        if max_length < 0:
            raise ValueError("max_length must be non-negative")
        return self.translate(key)[:max_length]


__all__ = ["Translator", "build_catalogue"]
