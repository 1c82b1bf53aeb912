"""Tests for the locale reconciliation engine."""

from __future__ import annotations

from pathlib import Path

import pytest
from locale_audit.loaders import LocaleLoader, discover_sprinkles, files_by_sprinkle
from locale_audit.reconciler import (
    AuditOptions,
    AuditResult,
    audit_locales,
    find_empty_leaves,
    find_missing_keys,
    flatten,
    intersect_matching,
    resolve_target_locales,
)
from locale_audit.values import as_locale_value


def _memory_loader(documents: dict[tuple[str, str, str], dict]):
    def _load(locale: str, sprinkle: str, relative_path: str) -> dict:
        try:
            return documents[(locale, sprinkle, relative_path)]
        except KeyError as exc:
            raise FileNotFoundError(f"{sprinkle}/{locale}/{relative_path}") from exc

    return _load


def test_flatten_builds_dotted_paths() -> None:
    document = {"a": {"b": {"c": "deep"}, "d": None}, "e": "top"}
    assert flatten(document) == {"a.b.c": "deep", "a.d": None, "e": "top"}


def test_flatten_is_idempotent_on_flat_input() -> None:
    flat = {"one": "1", "two": None, "three": ""}
    assert flatten(flat) == flat
    assert flatten(flatten({"x": {"y": "z"}})) == {"x.y": "z"}


def test_flatten_counts_every_leaf() -> None:
    document = {
        "a": "1",
        "b": {"c": "2", "d": {"e": "3", "f": {"g": None}}},
        "h": {},
        "i": ["j", "k"],
    }
    flat = flatten(document)
    assert len(flat) == 6
    assert flat["b.d.f.g"] is None
    assert flat["i.1"] == "k"


def test_flatten_empty_and_all_null_documents() -> None:
    assert flatten({}) == {}
    assert flatten({"a": None, "b": {"c": None}}) == {"a": None, "b.c": None}


def test_flatten_accepts_subtree_and_rejects_scalars() -> None:
    assert flatten(as_locale_value({"a": {"b": "x"}})) == {"a.b": "x"}
    with pytest.raises(TypeError):
        flatten("not a document")  # type: ignore[arg-type]


def test_find_empty_leaves() -> None:
    assert find_empty_leaves(flatten({"a": {"b": "", "c": "x"}})) == {"a.b": ""}
    assert find_empty_leaves({"a": None, "b": "0", "c": 0}) == {"a": None}


def test_intersect_matching_detects_duplicates() -> None:
    assert intersect_matching({"a.b": "hello"}, {"a.b": "hello"}) == {"a.b": "hello"}
    assert intersect_matching({"a.b": "hello"}, {"a.b": "bonjour"}) == {}
    assert intersect_matching({}, {"a.b": "x"}) == {}


def test_intersect_matching_drops_absent_and_null_keys() -> None:
    primary = {"a": "x", "b": "y", "c": None}
    secondary = {"a": "x", "c": None}
    assert intersect_matching(primary, secondary) == {"a": "x"}


def test_intersect_matching_uses_structural_equality() -> None:
    primary = {"list": ["a", "b"], "num": 1, "text": "1"}
    secondary = {"list": ["a", "b"], "num": "1", "text": "1"}
    assert intersect_matching(primary, secondary) == {"list": ["a", "b"], "text": "1"}


def test_intersect_matching_non_mapping_inputs_yield_empty() -> None:
    assert intersect_matching(None, {"a": "x"}) == {}
    assert intersect_matching({"a": "x"}, ["a"]) == {}


def test_find_missing_keys() -> None:
    assert find_missing_keys({"a": "x", "b": "y"}, {"a": "z"}) == {"b": "y"}
    assert find_missing_keys({"a": "x"}, {"a": None}) == {}
    assert find_missing_keys("nope", {}) == {}


def test_resolve_target_locales_excludes_base() -> None:
    targets = resolve_target_locales("en_US", ["en_US", "fr_FR", "es_ES"])
    assert set(targets) == {"fr_FR", "es_ES"}
    assert targets == ["fr_FR", "es_ES"]


def test_resolve_target_locales_uses_explicit_list() -> None:
    available = ["en_US", "fr_FR", "es_ES"]
    assert resolve_target_locales("en_US", available, "es_ES, de_DE") == [
        "es_ES",
        "de_DE",
    ]
    assert resolve_target_locales("en_US", available, ["fr_FR"]) == ["fr_FR"]
    assert resolve_target_locales("en_US", available, " , ") == ["fr_FR", "es_ES"]


def test_audit_locales_end_to_end_in_memory() -> None:
    loader = _memory_loader(
        {
            ("en_US", "core", "messages.json"): {"greeting": "Hello", "farewell": ""},
            ("fr_FR", "core", "messages.json"): {
                "greeting": "Hello",
                "farewell": "Au revoir",
            },
        }
    )
    result = audit_locales(
        "en_US", ["fr_FR"], {"core": ["messages.json"]}, loader=loader
    )
    assert result.empty_values == {"core/locale/en_US/messages.json": {"farewell": ""}}
    assert result.duplicate_values == {
        "core/locale/fr_FR/messages.json": {"greeting": "Hello"}
    }
    assert result.missing_keys == {}
    assert result.lookup("greeting") == "Hello"
    assert not result.is_clean()


def test_audit_locales_respects_skip_flags() -> None:
    loader = _memory_loader(
        {
            ("en_US", "core", "m.json"): {"a": "", "b": "same"},
            ("fr_FR", "core", "m.json"): {"b": "same"},
        }
    )
    files = {"core": ["m.json"]}

    only_duplicates = audit_locales(
        "en_US", ["fr_FR"], files, AuditOptions(skip_empty_check=True), loader=loader
    )
    assert only_duplicates.empty_values == {}
    assert only_duplicates.count("duplicate_values") == 1

    only_empty = audit_locales(
        "en_US",
        ["fr_FR"],
        files,
        AuditOptions(skip_duplicate_check=True),
        loader=loader,
    )
    assert only_empty.duplicate_values == {}
    assert only_empty.count("empty_values") == 1

    with_missing = audit_locales(
        "en_US",
        ["fr_FR"],
        files,
        AuditOptions(skip_missing_check=False),
        loader=loader,
    )
    assert with_missing.missing_keys == {"core/locale/fr_FR/m.json": {"a": ""}}


def test_audit_locales_never_compares_base_with_itself() -> None:
    loader = _memory_loader({("en_US", "core", "m.json"): {"a": "x"}})
    result = audit_locales("en_US", ["en_US"], {"core": ["m.json"]}, loader=loader)
    assert result.target_locales == []
    assert result.duplicate_values == {}


def test_audit_locales_propagates_missing_files() -> None:
    loader = _memory_loader({("en_US", "core", "m.json"): {"a": "x"}})
    with pytest.raises(FileNotFoundError):
        audit_locales("en_US", ["fr_FR"], {"core": ["m.json"]}, loader=loader)


def test_audit_locales_rejects_bad_worker_count() -> None:
    with pytest.raises(ValueError):
        audit_locales(
            "en_US", [], {}, AuditOptions(max_workers=0), loader=_memory_loader({})
        )


def test_audit_locales_on_disk(sprinkles_root: Path) -> None:
    sprinkles = discover_sprinkles(sprinkles_root)
    files = files_by_sprinkle(sprinkles, "en_US")
    result = audit_locales(
        "en_US",
        ["fr_FR", "es_ES"],
        files,
        AuditOptions(skip_missing_check=False, include_target_empties=True),
        loader=LocaleLoader(sprinkles),
    )

    assert result.empty_values == {
        "account/locale/en_US/auth.yaml": {"auth.logout": ""},
        "account/locale/es_ES/auth.yaml": {"auth.logout": None},
        "core/locale/en_US/messages.json": {"farewell": ""},
    }
    assert result.duplicate_values == {
        "account/locale/es_ES/auth.yaml": {"auth.login": "Log in"},
        "core/locale/fr_FR/messages.json": {"greeting": "Hello", "nested.count": 3},
    }
    assert result.missing_keys == {
        "core/locale/es_ES/messages.json": {"nested.count": 3},
    }


def test_parallel_audit_matches_sequential(sprinkles_root: Path) -> None:
    sprinkles = discover_sprinkles(sprinkles_root)
    files = files_by_sprinkle(sprinkles, "en_US")
    loader = LocaleLoader(sprinkles)
    sequential = audit_locales("en_US", ["fr_FR", "es_ES"], files, loader=loader)
    parallel = audit_locales(
        "en_US", ["fr_FR", "es_ES"], files, AuditOptions(max_workers=4), loader=loader
    )
    assert parallel.to_dict() == sequential.to_dict()
    assert list(parallel.duplicate_values) == list(sequential.duplicate_values)


def test_audit_result_lookup_and_sections() -> None:
    result = AuditResult(
        base_locale="en_US",
        target_locales=["fr_FR"],
        duplicate_values={"core/locale/fr_FR/m.json": {"a": "x"}},
    )
    assert result.lookup("a", "core/locale/fr_FR/m.json") == "x"
    with pytest.raises(KeyError):
        result.lookup("a", "other.json")
    with pytest.raises(KeyError):
        result.section("unknown")
    assert result.count("duplicate_values") == 1
    assert result.to_dict()["target_locales"] == ["fr_FR"]


def test_flatten_keeps_empty_keys_distinct() -> None:
    assert flatten({"": {"b": "x"}, "b": "y"}) == {".b": "x", "b": "y"}


def test_base_only_checks_do_not_open_target_files() -> None:
    loader = _memory_loader({("en_US", "core", "m.json"): {"a": ""}})
    result = audit_locales(
        "en_US",
        ["fr_FR"],
        {"core": ["m.json"]},
        AuditOptions(skip_duplicate_check=True),
        loader=loader,
    )
    assert result.empty_values == {"core/locale/en_US/m.json": {"a": ""}}

    with pytest.raises(FileNotFoundError):
        audit_locales(
            "en_US",
            ["fr_FR"],
            {"core": ["m.json"]},
            AuditOptions(skip_duplicate_check=True, include_target_empties=True),
            loader=loader,
        )
