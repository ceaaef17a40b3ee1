# src/main.py — v1
"""CLI entry point — analyze and cache commands.

Usage:
    profilescope analyze <file> [--profile-id ID] [--url URL] [--ai|--no-ai]
                                [--force-refresh] [--json]
    profilescope cache invalidate <profile_id>
    profilescope cache clear
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from profilescope.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = _load_settings(args.verbose)
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="profilescope",
        description=f"profilescope v{__version__} — profile completeness and quality analyzer",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- analyze ---
    p_analyze = subparsers.add_parser(
        "analyze", help="Analyze a saved profile page",
    )
    p_analyze.add_argument("file", type=Path, help="Path to saved HTML page")
    p_analyze.add_argument(
        "--profile-id", default=None,
        help="Cache key (default: derived from --url or the page)",
    )
    p_analyze.add_argument(
        "--url", default=None,
        help="Original page URL, used to derive the profile id",
    )
    ai_group = p_analyze.add_mutually_exclusive_group()
    ai_group.add_argument(
        "--ai", dest="ai_enabled", action="store_true", default=None,
        help="Run the AI quality analysis (overrides AI_ENABLED)",
    )
    ai_group.add_argument(
        "--no-ai", dest="ai_enabled", action="store_false",
        help="Skip the AI quality analysis",
    )
    p_analyze.add_argument(
        "--force-refresh", action="store_true",
        help="Ignore any cached result",
    )
    p_analyze.add_argument(
        "--json", dest="as_json", action="store_true",
        help="Print the full report as JSON",
    )
    p_analyze.set_defaults(func=_cmd_analyze, ai_enabled=None)

    # --- cache ---
    p_cache = subparsers.add_parser("cache", help="Manage cached results")
    cache_sub = p_cache.add_subparsers(dest="cache_command")

    p_invalidate = cache_sub.add_parser("invalidate", help="Drop one profile's entry")
    p_invalidate.add_argument("profile_id", help="Profile id to invalidate")
    p_invalidate.set_defaults(func=_cmd_cache_invalidate)

    p_clear = cache_sub.add_parser("clear", help="Drop every cached entry")
    p_clear.set_defaults(func=_cmd_cache_clear)

    return parser


def _load_settings(verbose: bool):
    """Load settings and configure logging from them."""
    from profilescope.config.settings import load_settings
    from profilescope.logging.logger import setup_logging

    settings = load_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file or None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    return settings


async def _cmd_analyze(args: argparse.Namespace, settings) -> int:
    """Execute single-page analysis."""
    from profilescope.api.facade import analyze_html
    from profilescope.api.models import AnalysisReport

    file_path: Path = args.file
    if not file_path.is_file():
        logger.error("File not found: %s", file_path)
        return 1

    logger.info("Analyzing %s", file_path.name)
    result = await analyze_html(
        file_path.read_text(encoding="utf-8"),
        profile_id=args.profile_id,
        url=args.url,
        settings=settings,
        force_refresh=args.force_refresh,
        ai_enabled=args.ai_enabled,
    )
    report = AnalysisReport.from_result(result)
    if args.as_json:
        print(report.model_dump_json(indent=2))
    else:
        _print_report(report)
    return 0


async def _cmd_cache_invalidate(args: argparse.Namespace, settings) -> int:
    from profilescope.api.facade import invalidate_cache

    await invalidate_cache(args.profile_id, settings)
    print(f"Invalidated cache entry for {args.profile_id}")
    return 0


async def _cmd_cache_clear(args: argparse.Namespace, settings) -> int:
    from profilescope.api.facade import clear_cache

    removed = await clear_cache(settings)
    print(f"Removed {removed} cache entries")
    return 0


def _print_report(report) -> None:
    """Print a human-readable summary of an AnalysisReport."""
    print("\nAnalysis complete:")
    print(f"  Profile:       {report.profile_id}")
    print(f"  State:         {report.state.value}")
    print(f"  Completeness:  {report.completeness_score}/100 ({report.completeness_level})")
    if report.from_cache:
        print("  Source:        cache")
    if report.quality is not None:
        stale = " (stale)" if report.stale else ""
        print(f"  Quality:       {report.quality.score:.1f}/10{stale}")
        for cap in report.quality.applied_caps:
            print(f"    capped at {cap.cap:g}: {cap.reason}")
    if report.ai_error is not None:
        print(f"  AI error:      {report.ai_error.type.value}: {report.ai_error.message}")
    if report.missing_items:
        print("  Improvements:")
        for item in report.missing_items:
            print(f"    [{item.priority}] {item.message} (+{item.impact_points:.1f})")
    for error in report.section_errors:
        print(f"  Section error: {error.section.value} ({error.error_type})")


if __name__ == "__main__":
    sys.exit(main())
