from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
import sys

from .inspector import ElementInspector, build_report
from .report import render_report
from .selection import rank_matches
from .settings import InspectorSettings, load_settings, resolve_settings, save_settings
from .snapshot_parser import parse_snapshot

EXIT_MATCHED = 0
EXIT_NO_MATCH = 1
EXIT_NO_SNAPSHOT = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inspectlocator",
        description="Find the element a failed locator probably meant in a dumped page source.",
    )
    parser.add_argument("snapshot", type=Path, help="Page source XML file (driver.page_source dump).")
    parser.add_argument("locator", help="Failed locator, e.g. \"By.id: com.app:id/search\" or an XPath.")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors.")
    parser.add_argument("--depth", type=int, default=None, help="Depth of the XML context block.")
    parser.add_argument(
        "--candidates",
        type=int,
        default=0,
        help="Also list the N best scoring nodes.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings file (default: ~/.inspectlocator/config.json).",
    )
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Store --no-color and --depth in the settings file.",
    )
    return parser


def _with_cli_options(settings: InspectorSettings, args: argparse.Namespace) -> InspectorSettings:
    if args.no_color:
        settings = replace(settings, color=False)
    if args.depth is not None:
        settings = replace(settings, context_depth=max(0, args.depth))
    return settings


def main(argv: list[str] | None = None) -> int:
    if sys.version_info < (3, 11):
        raise SystemExit(
            "inspectlocator requires Python 3.11+. "
            f"Current interpreter: {sys.executable} (Python {sys.version.split()[0]})"
        )
    args = _build_parser().parse_args(argv)
    settings = _with_cli_options(resolve_settings(args.config), args)
    inspector = ElementInspector(settings)

    if args.save_config:
        ok, error = save_settings(_with_cli_options(load_settings(args.config), args), args.config)
        if not ok:
            inspector.logger.warning("Could not save settings: %s", error)
            print(f"[inspectlocator] {error}", file=sys.stderr)

    try:
        markup = args.snapshot.read_bytes()
    except OSError as exc:
        inspector.logger.warning("Could not read snapshot %s: %s", args.snapshot, exc)
        print(f"[inspectlocator] snapshot unavailable: {args.snapshot}", file=sys.stderr)
        return EXIT_NO_SNAPSHOT

    root = parse_snapshot(markup)
    if root is None:
        print(f"[inspectlocator] snapshot could not be parsed: {args.snapshot}", file=sys.stderr)
        return EXIT_NO_SNAPSHOT

    report = build_report(root, args.locator, context_depth=settings.context_depth)
    print(render_report(report, color=settings.color))

    if args.candidates > 0:
        for candidate in rank_matches(root, report.search_term, limit=args.candidates):
            reasons = ", ".join(candidate.reasons)
            print(f"{candidate.score:>6}  #{candidate.order:<5} {candidate.node.tag}  [{reasons}]")

    return EXIT_MATCHED if report.matched else EXIT_NO_MATCH


if __name__ == "__main__":
    raise SystemExit(main())
