"""Locale audit package initialization."""

from .loaders import (
    LocaleDocument,
    LocaleLoader,
    discover_sprinkles,
    files_by_sprinkle,
    load_document,
)
from .preview import Translator, build_catalogue
from .reconciler import (
    AuditOptions,
    AuditResult,
    audit_locales,
    find_empty_leaves,
    find_missing_keys,
    flatten,
    intersect_matching,
    resolve_target_locales,
)
from .values import Leaf, LocaleValue, Subtree, as_locale_value, values_equal

__version__ = "0.1.0"

__all__ = [
    "AuditOptions",
    "AuditResult",
    "Leaf",
    "LocaleDocument",
    "LocaleLoader",
    "LocaleValue",
    "Subtree",
    "Translator",
    "as_locale_value",
    "audit_locales",
    "build_catalogue",
    "discover_sprinkles",
    "files_by_sprinkle",
    "find_empty_leaves",
    "find_missing_keys",
    "flatten",
    "intersect_matching",
    "load_document",
    "resolve_target_locales",
    "values_equal",
]
