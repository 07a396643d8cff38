"""Command-line interface for yodalint."""

from __future__ import annotations

import argparse
import fnmatch
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from yodalint.errors import LexError, format_context
from yodalint.rules import Diagnostic, Severity, YodaConditionsRule

DEFAULT_EXTENSIONS = ("php", "inc")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    paths: list[Path]
    extensions: list[str]
    exclude: list[str]
    severity: Severity
    brief: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="yodalint",
        description="Report PHP comparisons that are not written in Yoda order",
    )
    p.add_argument("paths", nargs="+", metavar="PATH", help="PHP file or directory to lint")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover yodalint.toml)",
    )
    p.add_argument(
        "--ext",
        action="append",
        default=[],
        metavar="EXT",
        help="File extension to lint in directories (repeatable, default: php, inc)",
    )
    p.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="GLOB",
        help="Skip files matching this glob (repeatable)",
    )
    p.add_argument(
        "--severity",
        default=None,
        metavar="LEVEL",
        help="Report violations as 'error' or 'warning' (default: error)",
    )
    p.add_argument("--brief", action="store_true", help="One line per diagnostic")
    p.add_argument("--debug", action="store_true", help="Dump tokens to stderr")
    return p


def parse_severity(s: str) -> Severity:
    """Parse a severity name, case-insensitively."""
    try:
        return Severity(s.lower())
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid severity (expected 'error' or 'warning'): {s}"
        ) from None


def load_config(config_path: Path | None, base_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else base_dir / "yodalint.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace, base_dir: Path | None = None) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, base_dir if base_dir is not None else Path("."))
    section = config.get("yodalint")
    if not isinstance(section, dict):
        section = {}

    # Extensions: CLI replaces config
    extensions = list(DEFAULT_EXTENSIONS)
    cfg_ext = section.get("extensions")
    if isinstance(cfg_ext, list):
        extensions = [str(e) for e in cfg_ext]
    if args.ext:
        extensions = list(args.ext)
    extensions = [e.lstrip(".").lower() for e in extensions]

    # Exclude globs: config + CLI
    exclude: list[str] = []
    cfg_exclude = section.get("exclude")
    if isinstance(cfg_exclude, list):
        exclude.extend(str(g) for g in cfg_exclude)
    exclude.extend(args.exclude)

    # Severity: config < CLI
    severity = Severity.ERROR
    cfg_severity = section.get("severity")
    if isinstance(cfg_severity, str):
        severity = parse_severity(cfg_severity)
    if args.severity is not None:
        severity = parse_severity(args.severity)

    return CliOptions(
        paths=[Path(p) for p in args.paths],
        extensions=extensions,
        exclude=exclude,
        severity=severity,
        brief=args.brief,
        debug=args.debug,
    )


def collect_files(options: CliOptions) -> list[Path]:
    """Expand directories into matching files; explicit files are always kept."""
    files: list[Path] = []
    for path in options.paths:
        if path.is_dir():
            for candidate in sorted(path.rglob("*")):
                if not candidate.is_file():
                    continue
                if candidate.suffix.lstrip(".").lower() not in options.extensions:
                    continue
                if _excluded(candidate, options.exclude):
                    continue
                files.append(candidate)
        elif not _excluded(path, options.exclude):
            files.append(path)
    return files


def _excluded(path: Path, patterns: list[str]) -> bool:
    posix = path.as_posix()
    return any(fnmatch.fnmatch(posix, pat) or fnmatch.fnmatch(path.name, pat) for pat in patterns)


def format_diagnostic(diag: Diagnostic, source: str, filename: str, *, brief: bool = False) -> str:
    """Render a diagnostic as a context block, or as one line when *brief*."""
    start = diag.span.start
    if brief:
        return (
            f"{filename}:{start.line}:{start.column}: "
            f"{diag.severity.value}: {diag.message} [{diag.code}]"
        )
    return format_context(
        f"{diag.message} [{diag.code}]",
        diag.span,
        source,
        filename,
        label=diag.severity.value,
    )


def lint_file(path: Path, options: CliOptions) -> list[Diagnostic]:
    """Lint one file and print its diagnostics to stdout."""
    from yodalint.debug import dump_tokens
    from yodalint.engine import Linter
    from yodalint.lexer import tokenize
    from yodalint.stream import TokenStream

    source = path.read_text(encoding="utf-8")
    stream = TokenStream(tokenize(source, str(path)))

    if options.debug:
        dump_tokens(stream, file=sys.stderr)

    linter = Linter([YodaConditionsRule(options.severity)])
    diagnostics = linter.lint_stream(stream)
    for diag in diagnostics:
        print(format_diagnostic(diag, source, str(path), brief=options.brief))
    return diagnostics


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    files = collect_files(options)
    failed = False
    errors = 0
    warnings = 0

    for path in files:
        try:
            diagnostics = lint_file(path, options)
        except LexError as exc:
            print(exc.format(str(path)), file=sys.stderr)
            failed = True
            continue
        except (OSError, UnicodeDecodeError) as exc:
            print(f"error: cannot read {path}: {exc}", file=sys.stderr)
            failed = True
            continue
        for diag in diagnostics:
            if diag.severity == Severity.ERROR:
                errors += 1
            else:
                warnings += 1

    print(
        f"Checked {len(files)} file(s): {errors} error(s), {warnings} warning(s)",
        file=sys.stderr,
    )

    if failed:
        return 2
    if errors:
        return 1
    return 0
