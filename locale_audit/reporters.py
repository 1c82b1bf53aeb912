"""Report generation helpers for locale audit results."""

from __future__ import annotations

import html
import json
from pathlib import Path
from typing import Any, Mapping, Sequence

import pandas as pd

from .preview import Translator
from .reconciler import SECTIONS, AuditResult

COLUMNS = ["file_path", "key", "preview"]
DEFAULT_SECTIONS = ("empty_values", "duplicate_values")
SECTION_TITLES = {
    "empty_values": ("EMPTY VALUES", "TRANSLATION PREVIEW"),
    "duplicate_values": ("DUPLICATE VALUES", "DUPLICATE VALUE"),
    "missing_keys": ("MISSING KEYS", "TRANSLATION PREVIEW"),
}


def _ensure_dir(path: Path) -> None:
    Path(path).mkdir(parents=True, exist_ok=True)


def display_path(file_path: str) -> str:
    """Trim anything before a ``sprinkles`` segment to keep paths readable."""

    marker = file_path.find("sprinkles")
    return file_path[marker:] if marker >= 0 else file_path


def _preview(
    key: str, value: Any, translator: Translator | None, max_length: int
) -> str:
    if translator is not None:
        return translator.preview(key, max_length)
    if value is None:
        return ""
    return str(value)[:max_length]


def result_rows(
    section: Mapping[str, Mapping[str, Any]],
    translator: Translator | None = None,
    max_length: int = 255,
    *,
    name: str | None = None,
) -> pd.DataFrame:
    """Return one row per (file, key) of an audit section.

    Duplicates preview the recorded value itself; the other sections preview
    the base-locale translation of the key when a translator is given.
    """

    if name == "duplicate_values":
        translator = None
    rows = [
        {
            "file_path": display_path(file_path),
            "key": key,
            "preview": _preview(key, value, translator, max_length),
        }
        for file_path, entries in section.items()
        for key, value in entries.items()
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def result_frame(
    result: AuditResult,
    translator: Translator | None = None,
    max_length: int = 255,
    sections: Sequence[str] = DEFAULT_SECTIONS,
) -> pd.DataFrame:
    """Concatenate the selected sections into a single table."""

    frames = []
    for name in sections:
        frame = result_rows(result.section(name), translator, max_length, name=name)
        frame.insert(0, "section", name)
        frames.append(frame)
    if not frames:
        return pd.DataFrame(columns=["section", *COLUMNS])
    return pd.concat(frames, ignore_index=True)


def render_text(
    result: AuditResult,
    translator: Translator | None = None,
    max_length: int = 255,
    sections: Sequence[str] = DEFAULT_SECTIONS,
) -> str:
    """Render the audit as a borderless console table."""

    searched = "|".join(result.target_locales)
    lines = [
        f"LOCALES SEARCHED: |{searched}|",
        f"USING | {result.base_locale} | FOR TRANSLATION PREVIEW AND COMPARISON",
        "",
    ]
    for name in sections:
        title, preview_header = SECTION_TITLES[name]
        lines.append(title)
        lines.append("-" * len(title))
        frame = result_rows(result.section(name), translator, max_length, name=name)
        if frame.empty:
            lines.append("(none)")
        else:
            frame.columns = ["FILE PATH", "KEY", preview_header]
            lines.append(frame.to_string(index=False, justify="left"))
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def export_json(result: AuditResult, out_path: Path) -> Path:
    """Write the raw audit mappings as JSON."""

    out_path = Path(out_path)
    _ensure_dir(out_path.parent)
    out_path.write_text(
        json.dumps(result.to_dict(), indent=2, ensure_ascii=False, default=str),
        encoding="utf-8",
    )
    return out_path


def export_csv(
    result: AuditResult,
    out_path: Path,
    translator: Translator | None = None,
    max_length: int = 255,
    sections: Sequence[str] = DEFAULT_SECTIONS,
) -> Path:
    out_path = Path(out_path)
    _ensure_dir(out_path.parent)
    result_frame(result, translator, max_length, sections).to_csv(out_path, index=False)
    return out_path


def render_html(
    result: AuditResult,
    outdir: Path,
    translator: Translator | None = None,
    max_length: int = 255,
    sections: Sequence[str] = DEFAULT_SECTIONS,
) -> Path:
    """Render a standalone HTML report into *outdir*."""

    _ensure_dir(outdir)
    html_path = Path(outdir) / "locale_audit.html"
    searched = ", ".join(result.target_locales) or "none"
    parts: list[str] = [
        "<h1>Missing/Duplicate Locale Values</h1>",
        f"<p>Locales searched: {html.escape(searched)}</p>",
        f"<p>Base locale: {html.escape(result.base_locale)}</p>",
    ]
    for name in sections:
        title, _ = SECTION_TITLES[name]
        parts.append(f"<h2>{title.title()}</h2>")
        frame = result_rows(result.section(name), translator, max_length, name=name)
        if frame.empty:
            parts.append("<p>No data.</p>")
        else:
            parts.append(frame.to_html(index=False))
    html_path.write_text("\n".join(parts), encoding="utf-8")
    return html_path


def export_xlsx(
    result: AuditResult,
    out_path: Path,
    translator: Translator | None = None,
    max_length: int = 255,
    sections: Sequence[str] = DEFAULT_SECTIONS,
) -> Path:
    """Export one worksheet per audit section."""

    out_path = Path(out_path)
    _ensure_dir(out_path.parent)
    summary = pd.DataFrame(
        [{"section": name, "count": result.count(name)} for name in sections]
    )
    with pd.ExcelWriter(out_path, engine="xlsxwriter") as writer:
        summary.to_excel(writer, sheet_name="Summary", index=False)
        for name in sections:
            frame = result_rows(result.section(name), translator, max_length, name=name)
            frame.to_excel(writer, sheet_name=name[:31], index=False)
    return out_path


__all__ = [
    "SECTIONS",
    "display_path",
    "export_csv",
    "export_json",
    "export_xlsx",
    "render_html",
    "render_text",
    "result_frame",
    "result_rows",
]
