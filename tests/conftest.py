"""Shared fixtures building a small sprinkle tree on disk."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


def _write_json(path: Path, payload: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.fixture
def sprinkles_root(tmp_path: Path) -> Path:
    root = tmp_path / "app" / "sprinkles"

    core = root / "core" / "locale"
    _write_json(
        core / "en_US" / "messages.json",
        {
            "greeting": "Hello",
            "farewell": "",
            "nested": {"title": "Title", "count": 3},
        },
    )
    _write_json(
        core / "fr_FR" / "messages.json",
        {
            "greeting": "Hello",
            "farewell": "Au revoir",
            "nested": {"title": "Titre", "count": 3},
        },
    )
    _write_json(
        core / "es_ES" / "messages.json",
        {"greeting": "Hola", "farewell": "Adiós", "nested": {"title": "Título"}},
    )

    account = root / "account" / "locale"
    _write_text(
        account / "en_US" / "auth.yaml", "auth:\n  login: Log in\n  logout: ''\n"
    )
    _write_text(
        account / "fr_FR" / "auth.yaml",
        "auth:\n  login: Connexion\n  logout: Déconnexion\n",
    )
    _write_text(account / "es_ES" / "auth.yaml", "auth:\n  login: Log in\n  logout:\n")
    return root


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "locale_audit.yaml"
    path.write_text(
        "site:\n"
        "  locales:\n"
        "    available:\n"
        "      en_US: English\n"
        "      fr_FR: Français\n"
        "      es_ES: Español\n"
        "    default: en_US\n"
        "audit:\n"
        "  preview_length: 40\n",
        encoding="utf-8",
    )
    return path
