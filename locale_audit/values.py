"""Tagged representation of locale translation trees."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Union

Scalar = Union[str, int, float, bool, None]


@dataclass(frozen=True, slots=True)
class Leaf:
    """Terminal translation value (a message, a number or ``None``)."""

    value: Scalar


@dataclass(frozen=True, slots=True)
class Subtree:
    """Nested group of translation values keyed by string."""

    children: Mapping[str, "LocaleValue"]


LocaleValue = Union[Leaf, Subtree]


def as_locale_value(raw: Any) -> LocaleValue:
    """Convert a parsed JSON/YAML structure into a :class:`LocaleValue`.

    Mappings become subtrees with stringified keys. Lists and tuples are
    treated as subtrees keyed by their index so ``["a", "b"]`` flattens to
    ``.0`` and ``.1`` entries. Everything else is a leaf.
    """

    if isinstance(raw, (Leaf, Subtree)):
        return raw
    if isinstance(raw, Mapping):
        return Subtree({str(key): as_locale_value(val) for key, val in raw.items()})
    if isinstance(raw, (list, tuple)):
        return Subtree({str(i): as_locale_value(val) for i, val in enumerate(raw)})
    return Leaf(raw)


def is_blank(value: Any) -> bool:
    """Return ``True`` for the placeholder values ``""`` and ``None``."""

    return value is None or (isinstance(value, str) and value == "")


def values_equal(left: Any, right: Any) -> bool:
    """Structural, type-aware equality used for duplicate detection.

    ``1``, ``1.0``, ``True`` and ``"1"`` are all different values; nested
    mappings and sequences compare element by element.
    """

    if isinstance(left, Leaf):
        left = left.value
    if isinstance(right, Leaf):
        right = right.value
    if isinstance(left, Subtree):
        left = left.children
    if isinstance(right, Subtree):
        right = right.children

    if isinstance(left, Mapping) or isinstance(right, Mapping):
        if not (isinstance(left, Mapping) and isinstance(right, Mapping)):
            return False
        if set(left) != set(right):
            return False
        return all(values_equal(left[key], right[key]) for key in left)

    if _is_sequence(left) or _is_sequence(right):
        if not (_is_sequence(left) and _is_sequence(right)):
            return False
        if len(left) != len(right):
            return False
        return all(values_equal(a, b) for a, b in zip(left, right))

    if type(left) is not type(right):
        return False
    return left == right


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


__all__ = [
    "Leaf",
    "LocaleValue",
    "Scalar",
    "Subtree",
    "as_locale_value",
    "is_blank",
    "values_equal",
]
