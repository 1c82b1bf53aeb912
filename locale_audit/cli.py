"""Command line entry-points for the locale audit toolkit."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Sequence

from .config import AuditSettings, load_settings
from .loaders import (
    LocaleLoader,
    available_locales,
    discover_sprinkles,
    files_by_sprinkle,
)
from .preview import Translator, build_catalogue
from .reconciler import AuditOptions, AuditResult, audit_locales, resolve_target_locales
from .reporters import export_csv, export_json, export_xlsx, render_html, render_text
from .runlog import log_event

logger = logging.getLogger(__name__)

FORMATS = ("table", "json", "csv", "html", "xlsx")
DEFAULT_ROOT = Path("app/sprinkles")


def parse_length(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid preview length: {raw!r}") from exc
    if value < 0:
        raise argparse.ArgumentTypeError("Preview length must be non-negative")
    return value


def parse_workers(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid worker count: {raw!r}") from exc
    if value < 1:
        raise argparse.ArgumentTypeError("Worker count must be at least 1")
    return value


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _write_report(
    args: argparse.Namespace,
    result: AuditResult,
    translator: Translator,
    max_length: int,
    sections: Sequence[str],
) -> Path | None:
    fmt = args.format
    out = Path(args.out) if args.out else None
    if fmt == "table":
        text = render_text(result, translator, max_length, sections)
        if out is None:
            sys.stdout.write(text)
            return None
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8")
        return out
    if fmt == "json":
        return export_json(result, out or Path("locale_audit.json"))
    if fmt == "csv":
        return export_csv(
            result, out or Path("locale_audit.csv"), translator, max_length, sections
        )
    if fmt == "html":
        return render_html(result, out or Path("."), translator, max_length, sections)
    return export_xlsx(
        result, out or Path("locale_audit.xlsx"), translator, max_length, sections
    )


def _run_audit(
    args: argparse.Namespace, options: AuditOptions, sections: Sequence[str]
) -> AuditResult:
    _configure_logging(args.verbose)
    settings: AuditSettings = load_settings(args.config)

    sprinkles = discover_sprinkles(Path(args.root), settings.sprinkles)
    base_locale = args.base or settings.base_locale
    available = settings.available_locales or available_locales(sprinkles)
    targets = resolve_target_locales(base_locale, available, args.check)
    extensions = tuple(settings.audit.extensions)
    max_length = (
        args.length if args.length is not None else settings.audit.preview_length
    )
    logger.info("Auditing %s against %s", base_locale, ", ".join(targets) or "none")

    loader = LocaleLoader(sprinkles)
    files = files_by_sprinkle(sprinkles, base_locale, extensions)
    if not files:
        logger.warning("No %s locale files found under %s", base_locale, args.root)
    result = audit_locales(base_locale, targets, files, options, loader=loader)
    translator = Translator(build_catalogue(sprinkles, base_locale, loader, extensions))
    output = _write_report(args, result, translator, max_length, sections)

    if args.run_log:
        log_event(
            Path(args.run_log),
            args.command,
            {
                "base_locale": base_locale,
                "target_locales": targets,
                "counts": {name: result.count(name) for name in sections},
                "output": str(output) if output else None,
            },
        )
    if output is not None:
        print(f"Report written to {output}")
    if args.strict and not result.is_clean():
        raise SystemExit(1)
    return result


def cmd_missing_values(args: argparse.Namespace) -> AuditResult:
    options = AuditOptions(
        skip_empty_check=args.empty,
        skip_duplicate_check=args.duplicates,
        skip_missing_check=not args.missing_keys,
        include_target_empties=args.targets_empty,
        max_workers=args.workers,
    )
    sections = []
    if not options.skip_empty_check:
        sections.append("empty_values")
    if not options.skip_duplicate_check:
        sections.append("duplicate_values")
    if not options.skip_missing_check:
        sections.append("missing_keys")
    return _run_audit(args, options, sections)


def cmd_missing_keys(args: argparse.Namespace) -> AuditResult:
    options = AuditOptions(
        skip_empty_check=True,
        skip_duplicate_check=True,
        skip_missing_check=False,
        max_workers=args.workers,
    )
    return _run_audit(args, options, ["missing_keys"])


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        type=Path,
        default=DEFAULT_ROOT,
        help="Directory holding one sub-directory per sprinkle.",
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML settings file.")
    parser.add_argument(
        "-b",
        "--base",
        default=None,
        help="The base locale used for comparison and translation preview.",
    )
    parser.add_argument(
        "-c",
        "--check",
        default=None,
        help='One or more specific locales to check. E.g. "fr_FR,es_ES"',
    )
    parser.add_argument(
        "-l",
        "--length",
        type=parse_length,
        default=None,
        help="Set max length for preview column text (default: 255).",
    )
    parser.add_argument("--workers", type=parse_workers, default=1)
    parser.add_argument("--format", choices=FORMATS, default="table")
    parser.add_argument("--out", default=None, help="Output file or directory.")
    parser.add_argument(
        "--strict", action="store_true", help="Exit with status 1 when issues exist."
    )
    parser.add_argument("--run-log", default=None, help="Append a JSONL run record.")
    parser.add_argument("-v", "--verbose", action="store_true")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Locale file audit CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    values_parser = subparsers.add_parser(
        "missing-values",
        help="Generate a table of keys with missing values.",
        description=(
            "Find empty values in the base locale and values left identical "
            "to the base locale in the checked locales."
        ),
    )
    _add_common_arguments(values_parser)
    values_parser.add_argument(
        "-e",
        "--empty",
        action="store_true",
        help="Setting this will skip check for empty strings.",
    )
    values_parser.add_argument(
        "-d",
        "--duplicates",
        action="store_true",
        help="Setting this will skip comparison check.",
    )
    values_parser.add_argument(
        "--missing-keys",
        action="store_true",
        help="Also report keys absent from the checked locales.",
    )
    values_parser.add_argument(
        "--targets-empty",
        action="store_true",
        help="Also report empty values in the checked locales.",
    )
    values_parser.set_defaults(func=cmd_missing_values)

    keys_parser = subparsers.add_parser(
        "missing-keys", help="List base locale keys missing from other locales."
    )
    _add_common_arguments(keys_parser)
    keys_parser.set_defaults(func=cmd_missing_keys)
    return parser


def main(argv: Iterable[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(None if argv is None else list(argv))
    try:
        args.func(args)
    except FileNotFoundError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc


if __name__ == "__main__":
    main()
