"""Reconciliation of locale documents across a base and alternate locales."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Sequence

from .values import Leaf, Subtree, as_locale_value, is_blank, values_equal

Loader = Callable[[str, str, str], Mapping[str, Any]]

SECTIONS = ("empty_values", "duplicate_values", "missing_keys")


def flatten(document: Mapping[str, Any] | Subtree) -> dict[str, Any]:
    """Collapse a nested locale document into ``{"dotted.key": value}``."""

    tree = as_locale_value(document)
    if isinstance(tree, Leaf):
        raise TypeError("Locale document must be a mapping")
    result: dict[str, Any] = {}
    _collect(tree, None, result)
    return result


def _collect(tree: Subtree, prefix: str | None, out: dict[str, Any]) -> None:
    for key, node in tree.children.items():
        path = key if prefix is None else f"{prefix}.{key}"
        if isinstance(node, Subtree):
            _collect(node, path, out)
        else:
            out[path] = node.value


def find_empty_leaves(flat: Mapping[str, Any]) -> dict[str, Any]:
    """Return entries whose value is an empty string or ``None``."""

    return {key: value for key, value in flat.items() if is_blank(value)}


def intersect_matching(primary: Any, secondary: Any) -> dict[str, Any]:
    """Return entries of *primary* whose value is repeated verbatim in *secondary*.

    Keys absent from *secondary*, or holding ``None`` there, are dropped, as
    are keys whose values differ structurally. Non-mapping arguments yield an
    empty result instead of an error.
    """

    if not isinstance(primary, Mapping) or not isinstance(secondary, Mapping):
        return {}
    matches: dict[str, Any] = {}
    for key, value in primary.items():
        other = secondary.get(key)
        if other is None:
            continue
        if values_equal(value, other):
            matches[key] = value
    return matches


def find_missing_keys(primary: Any, secondary: Any) -> dict[str, Any]:
    """Return entries of *primary* whose key does not exist in *secondary*."""

    if not isinstance(primary, Mapping) or not isinstance(secondary, Mapping):
        return {}
    return {key: value for key, value in primary.items() if key not in secondary}


def resolve_target_locales(
    base_locale: str,
    available: Iterable[str],
    explicit: str | Sequence[str] | None = None,
) -> list[str]:
    """Return the locales to compare against *base_locale*.

    An explicit selection (``"fr_FR,es_ES"`` or a sequence) is used exactly as
    given. Otherwise every available locale except the base one is returned,
    in the configured order.
    """

    if explicit:
        items = explicit.split(",") if isinstance(explicit, str) else explicit
        chosen = [item.strip() for item in items if item and item.strip()]
        if chosen:
            return chosen
    return [locale for locale in dict.fromkeys(available) if locale != base_locale]


def locale_file_path(sprinkle: str, locale: str, relative_path: str) -> str:
    """Synthesize the report key for a locale file."""

    return f"{sprinkle}/locale/{locale}/{relative_path}"


@dataclass(frozen=True)
class AuditOptions:
    """Switches controlling which checks :func:`audit_locales` runs."""

    skip_empty_check: bool = False
    skip_duplicate_check: bool = False
    skip_missing_check: bool = True
    include_target_empties: bool = False
    max_workers: int = 1


@dataclass
class AuditResult:
    """Outcome of one audit run, keyed by file path then dotted key."""

    base_locale: str
    target_locales: list[str]
    empty_values: dict[str, dict[str, Any]] = field(default_factory=dict)
    duplicate_values: dict[str, dict[str, Any]] = field(default_factory=dict)
    missing_keys: dict[str, dict[str, Any]] = field(default_factory=dict)

    def section(self, name: str) -> dict[str, dict[str, Any]]:
        if name not in SECTIONS:
            raise KeyError(f"Unknown audit section: {name}")
        return getattr(self, name)

    def count(self, name: str) -> int:
        return sum(len(entries) for entries in self.section(name).values())

    def is_clean(self) -> bool:
        return all(self.count(name) == 0 for name in SECTIONS)

    def lookup(self, key: str, file_path: str | None = None) -> Any:
        """Return the recorded value for *key*, optionally within *file_path*."""

        for name in SECTIONS:
            for path, entries in self.section(name).items():
                if file_path is not None and path != file_path:
                    continue
                if key in entries:
                    return entries[key]
        raise KeyError(key)

    def to_dict(self) -> dict[str, Any]:
        return {
            "base_locale": self.base_locale,
            "target_locales": list(self.target_locales),
            "empty_values": {k: dict(v) for k, v in self.empty_values.items()},
            "duplicate_values": {k: dict(v) for k, v in self.duplicate_values.items()},
            "missing_keys": {k: dict(v) for k, v in self.missing_keys.items()},
        }


@dataclass
class _FileFindings:
    empty_values: dict[str, dict[str, Any]] = field(default_factory=dict)
    duplicate_values: dict[str, dict[str, Any]] = field(default_factory=dict)
    missing_keys: dict[str, dict[str, Any]] = field(default_factory=dict)


def _audit_file(
    sprinkle: str,
    relative_path: str,
    base_locale: str,
    target_locales: Sequence[str],
    options: AuditOptions,
    loader: Loader,
) -> _FileFindings:
    findings = _FileFindings()
    base = flatten(loader(base_locale, sprinkle, relative_path))
    reads_targets = (
        not options.skip_duplicate_check
        or not options.skip_missing_check
        or (options.include_target_empties and not options.skip_empty_check)
    )
    targets: dict[str, dict[str, Any]] = {}
    if reads_targets:
        targets = {
            locale: flatten(loader(locale, sprinkle, relative_path))
            for locale in target_locales
        }

    if not options.skip_empty_check:
        checked = {base_locale: base}
        if options.include_target_empties:
            checked.update(targets)
        for locale, flat in checked.items():
            empty = find_empty_leaves(flat)
            if empty:
                path = locale_file_path(sprinkle, locale, relative_path)
                findings.empty_values[path] = empty

    for locale, flat in targets.items():
        path = locale_file_path(sprinkle, locale, relative_path)
        if not options.skip_duplicate_check:
            duplicates = intersect_matching(base, flat)
            if duplicates:
                findings.duplicate_values[path] = duplicates
        if not options.skip_missing_check:
            missing = find_missing_keys(base, flat)
            if missing:
                findings.missing_keys[path] = missing
    return findings


def audit_locales(
    base_locale: str,
    target_locales: Sequence[str],
    files_by_sprinkle: Mapping[str, Iterable[str]],
    options: AuditOptions | None = None,
    *,
    loader: Loader,
) -> AuditResult:
    """Audit every base-locale file of every sprinkle against *target_locales*.

    ``loader(locale, sprinkle, relative_path)`` must return the parsed
    document and raise :class:`FileNotFoundError` for a missing file; such
    errors are propagated to the caller.
    """

    options = options or AuditOptions()
    if options.max_workers < 1:
        raise ValueError("max_workers must be at least 1")
    targets = [locale for locale in target_locales if locale != base_locale]
    jobs = sorted(
        (sprinkle, relative_path)
        for sprinkle, paths in files_by_sprinkle.items()
        for relative_path in paths
    )

    def _run(job: tuple[str, str]) -> _FileFindings:
        sprinkle, relative_path = job
        return _audit_file(
            sprinkle, relative_path, base_locale, targets, options, loader
        )

    if options.max_workers > 1 and len(jobs) > 1:
        with ThreadPoolExecutor(max_workers=options.max_workers) as pool:
            findings = list(pool.map(_run, jobs))
    else:
        findings = [_run(job) for job in jobs]

    result = AuditResult(base_locale=base_locale, target_locales=targets)
    for item in findings:
        result.empty_values.update(item.empty_values)
        result.duplicate_values.update(item.duplicate_values)
        result.missing_keys.update(item.missing_keys)
    return result


__all__ = [
    "AuditOptions",
    "AuditResult",
    "Loader",
    "SECTIONS",
    "audit_locales",
    "find_empty_leaves",
    "find_missing_keys",
    "flatten",
    "intersect_matching",
    "locale_file_path",
    "resolve_target_locales",
]
