# src/api/facade.py — v2
"""Public API facade — rewrite a document and export its rendered diagrams.

Usage:
    from tikzembed.api.facade import rewrite_file
    result = rewrite_file(Path("paper.typ"), Path("build/paper.typ"))
"""

from __future__ import annotations

import logging
from pathlib import Path

from tikzembed.api.models import RewriteOptions, RewriteResult
from tikzembed.config.settings import Settings
from tikzembed.core.models import Rendered
from tikzembed.logging.context import clear_context
from tikzembed.pipeline.rewriter import DiagramRenderer
from tikzembed.pipeline.session import TikzSession

logger = logging.getLogger(__name__)


def rewrite_document(
    text: str,
    settings: Settings | None = None,
    options: RewriteOptions | None = None,
    assets_dir: Path | None = None,
    document: str | None = None,
    renderer: DiagramRenderer | None = None,
) -> RewriteResult:
    """Rewrite ``text`` in a fresh session.

    Args:
        text: Host document text.
        settings: Global settings. Loaded from .env if None.
        options: Per-document overrides.
        assets_dir: If given, every rendered diagram is written there under
            its placeholder name.
        document: Display name for logs.
        renderer: Replacement renderer (tests, alternative toolchains).

    Returns:
        RewriteResult with the rewritten text and a report. Render failures
        are listed in the report; they do not raise.

    Raises:
        MetadataInconsistencyError: A rendered SVG has an unsupported width.
    """
    settings = _apply_overrides(settings or Settings(), options)

    try:
        with TikzSession(settings, document=document, renderer=renderer) as session:
            rewritten, report = session.rewrite_with_report(text)
            for failure in report.failures:
                logger.error(
                    "Diagram %s (%s) failed to render:\n%s",
                    session.codec.encode_name(failure.fingerprint),
                    failure.environment,
                    failure.message.rstrip(),
                )
            assets = export_assets(session, assets_dir) if assets_dir is not None else []
    finally:
        clear_context()

    return RewriteResult(text=rewritten, report=report, assets=assets)


def rewrite_file(
    input_path: Path,
    output_path: Path | None = None,
    assets_dir: Path | None = None,
    settings: Settings | None = None,
    options: RewriteOptions | None = None,
    renderer: DiagramRenderer | None = None,
) -> RewriteResult:
    """Rewrite a document file.

    The rewritten text goes to ``output_path`` when given. Assets default to
    the output file's directory so the host finds them by relative name.
    """
    text = Path(input_path).read_text(encoding="utf-8")
    if assets_dir is None and output_path is not None:
        assets_dir = Path(output_path).parent

    result = rewrite_document(
        text,
        settings=settings,
        options=options,
        assets_dir=assets_dir,
        document=Path(input_path).name,
        renderer=renderer,
    )

    if output_path is not None:
        out = Path(output_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(result.text, encoding="utf-8")
        result.output_path = out
        logger.info("Wrote %s", out)

    return result


def export_assets(session: TikzSession, assets_dir: Path) -> list[Path]:
    """Write each successfully rendered diagram to ``assets_dir``."""
    target = Path(assets_dir)
    target.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for fingerprint, result in session.cache.entries():
        if not isinstance(result, Rendered):
            continue
        path = target / session.codec.encode_name(fingerprint)
        path.write_bytes(result.data)
        written.append(path)

    logger.debug("Exported %d asset(s) to %s", len(written), target)
    return written


def _apply_overrides(settings: Settings, options: RewriteOptions | None) -> Settings:
    """Apply per-document overrides if provided."""
    if options is None:
        return settings
    overrides = options.model_dump(exclude_none=True)
    if not overrides:
        return settings
    current = settings.model_dump()
    current.update(overrides)
    return Settings(_env_file=None, **current)
