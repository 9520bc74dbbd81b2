# src/main.py — v2
"""CLI entry point — rewrite, render, check commands.

Usage:
    tikzembed rewrite <file> [-o OUT] [--assets DIR] [--syntax plain|fenced]
    tikzembed render <file> [--env tikzpicture] -o OUT.svg
    tikzembed check
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from tikzembed.version import __version__

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    from tikzembed.config.settings import ConfigurationError, load_settings
    from tikzembed.core.errors import TikzEmbedError

    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return EXIT_USAGE

    try:
        settings = load_settings()
    except (ConfigurationError, ValueError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    _setup_logging(settings, args.verbose)

    try:
        return args.func(args, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return EXIT_USAGE
    except TikzEmbedError as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return EXIT_FAILURE
    except OSError as exc:
        logger.error("I/O error: %s", exc, exc_info=args.verbose)
        return EXIT_FAILURE


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="tikzembed",
        description=f"tikzembed v{__version__} — render TikZ diagrams embedded in documents",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- rewrite ---
    p_rewrite = subparsers.add_parser(
        "rewrite", help="Replace diagrams in a document with image placeholders",
    )
    p_rewrite.add_argument("file", type=Path, help="Host document")
    p_rewrite.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Rewritten document path (default: stdout)",
    )
    p_rewrite.add_argument(
        "--assets", type=Path, default=None,
        help="Directory for rendered SVGs (default: next to --output)",
    )
    p_rewrite.add_argument(
        "--syntax", choices=["plain", "fenced"], default=None,
        help="Host syntax for diagram blocks (default: from settings)",
    )
    p_rewrite.set_defaults(func=_cmd_rewrite)

    # --- render ---
    p_render = subparsers.add_parser(
        "render", help="Render a single diagram source file to SVG",
    )
    p_render.add_argument("file", type=Path, help="Diagram body (no \\begin/\\end)")
    p_render.add_argument(
        "--env", default="tikzpicture",
        help="Diagram environment (default: tikzpicture)",
    )
    p_render.add_argument(
        "-o", "--output", type=Path, required=True,
        help="Output .svg path",
    )
    p_render.set_defaults(func=_cmd_render)

    # --- check ---
    p_check = subparsers.add_parser(
        "check", help="Check that the external tools are installed",
    )
    p_check.set_defaults(func=_cmd_check)

    return parser


def _cmd_rewrite(args: argparse.Namespace, settings) -> int:
    """Rewrite one document."""
    from tikzembed.api.facade import rewrite_file
    from tikzembed.api.models import RewriteOptions

    file_path: Path = args.file
    if not file_path.is_file():
        logger.error("File not found: %s", file_path)
        return EXIT_FAILURE

    options = RewriteOptions(host_syntax=args.syntax)
    result = rewrite_file(
        file_path,
        output_path=args.output,
        assets_dir=args.assets,
        settings=settings,
        options=options,
    )

    if args.output is None:
        sys.stdout.write(result.text)

    report = result.report
    print(
        f"{report.block_count} diagram(s), {report.distinct_fingerprints} distinct, "
        f"{report.cache_hits} reused, {len(report.failures)} failed",
        file=sys.stderr,
    )
    return EXIT_FAILURE if report.has_failures else EXIT_OK


def _cmd_render(args: argparse.Namespace, settings) -> int:
    """Render one diagram source file."""
    from tikzembed.cache.fingerprint import compute_fingerprint
    from tikzembed.core.models import Rendered
    from tikzembed.pipeline.session import TikzSession
    from tikzembed.render.svg_metadata import width_string

    if args.env not in settings.diagram_environments_list:
        logger.error(
            "Unknown environment %r (configured: %s)",
            args.env, ", ".join(settings.diagram_environments_list),
        )
        return EXIT_USAGE

    source = args.file.read_text(encoding="utf-8")
    fingerprint = compute_fingerprint(args.env, source)

    with TikzSession(settings, document=args.file.name) as session:
        result = session.cache.get_or_compute(
            fingerprint,
            lambda: session.renderer.render(source, args.env, fingerprint),
        )

    if not isinstance(result, Rendered):
        print(result.message, file=sys.stderr)
        return EXIT_FAILURE

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(result.data)
    print(f"{args.output} ({width_string(result.data)})", file=sys.stderr)
    return EXIT_OK


def _cmd_check(args: argparse.Namespace, settings) -> int:
    """Report whether the configured tools are on PATH."""
    missing = 0
    for tool in (settings.latex_engine, settings.svg_converter):
        location = shutil.which(tool)
        if location is None:
            missing += 1
            print(f"  {tool:<12} not found")
        else:
            print(f"  {tool:<12} {location}")
    return EXIT_FAILURE if missing else EXIT_OK


def _setup_logging(settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from tikzembed.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
