"""Discovery and parsing helpers for sprinkle locale files."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

logger = logging.getLogger(__name__)

LOCALE_DIRNAME = "locale"
DEFAULT_EXTENSIONS = (".json", ".yaml", ".yml")


@dataclass(frozen=True)
class LocaleDocument:
    """Parsed locale file identified by locale, sprinkle and relative path."""

    locale_id: str
    sprinkle_id: str
    relative_path: str
    content: Mapping[str, Any]


def discover_sprinkles(
    root: Path, names: Iterable[str] | None = None
) -> dict[str, Path]:
    """Return sprinkle directories below *root* keyed by sprinkle id.

    Parameters
    ----------
    root:
        Directory holding one sub-directory per sprinkle.
    names:
        Optional explicit load order. Every named sprinkle must exist.
    """

    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"Sprinkles directory not found: {root}")
    if names is not None:
        sprinkles: dict[str, Path] = {}
        for name in names:
            candidate = root / name
            if not candidate.is_dir():
                raise FileNotFoundError(f"Sprinkle '{name}' not found in {root}")
            sprinkles[name] = candidate
        return sprinkles
    return {path.name: path for path in sorted(root.iterdir()) if path.is_dir()}


def list_locale_files(
    sprinkle_dir: Path,
    locale: str,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> list[str]:
    """Return sorted POSIX paths of *locale* files, relative to the locale dir."""

    locale_dir = Path(sprinkle_dir) / LOCALE_DIRNAME / locale
    if not locale_dir.is_dir():
        logger.debug("No %s locale directory in %s", locale, sprinkle_dir)
        return []
    suffixes = {ext.lower() for ext in extensions}
    return sorted(
        path.relative_to(locale_dir).as_posix()
        for path in locale_dir.rglob("*")
        if path.is_file() and path.suffix.lower() in suffixes
    )


def files_by_sprinkle(
    sprinkles: Mapping[str, Path],
    locale: str,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> dict[str, list[str]]:
    """Map each sprinkle id to its *locale* files, skipping sprinkles without any."""

    extensions = tuple(extensions)
    result: dict[str, list[str]] = {}
    for name, directory in sprinkles.items():
        files = list_locale_files(directory, locale, extensions)
        if files:
            result[name] = files
    return result


def available_locales(sprinkles: Mapping[str, Path]) -> list[str]:
    """Return locale ids that have a directory in at least one sprinkle."""

    found: set[str] = set()
    for directory in sprinkles.values():
        locale_root = Path(directory) / LOCALE_DIRNAME
        if locale_root.is_dir():
            found.update(path.name for path in locale_root.iterdir() if path.is_dir())
    return sorted(found)


def load_document(path: Path) -> dict[str, Any]:
    """Parse a JSON or YAML locale file into a mapping."""

    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Locale file missing: {path}")
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text) if text.strip() else {}
    else:
        data = yaml.safe_load(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected locale document to be a mapping: {path}")
    return data


class LocaleLoader:
    """Resolve ``(locale, sprinkle, relative_path)`` triples to parsed documents."""

    def __init__(self, sprinkles: Mapping[str, Path]) -> None:
        self.sprinkles = dict(sprinkles)

    def path_for(self, locale: str, sprinkle: str, relative_path: str) -> Path:
        try:
            directory = self.sprinkles[sprinkle]
        except KeyError as exc:
            raise FileNotFoundError(f"Unknown sprinkle: {sprinkle}") from exc
        return Path(directory) / LOCALE_DIRNAME / locale / relative_path

    def __call__(
        self, locale: str, sprinkle: str, relative_path: str
    ) -> dict[str, Any]:
        path = self.path_for(locale, sprinkle, relative_path)
        logger.debug("Loading locale file %s", path)
        return load_document(path)

    def document(
        self, locale: str, sprinkle: str, relative_path: str
    ) -> LocaleDocument:
        return LocaleDocument(
            locale_id=locale,
            sprinkle_id=sprinkle,
            relative_path=relative_path,
            content=self(locale, sprinkle, relative_path),
        )


__all__ = [
    "DEFAULT_EXTENSIONS",
    "LocaleDocument",
    "LocaleLoader",
    "available_locales",
    "discover_sprinkles",
    "files_by_sprinkle",
    "list_locale_files",
    "load_document",
]
