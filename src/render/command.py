# src/render/command.py — v1
"""Run an external tool and report the outcome as a tagged value.

Three outcomes are distinguished:
    ok          — exit status 0, ``output`` holds stdout
    spawn_error — the program could not be started, ``output`` names it
    exit_error  — non-zero exit, ``output`` holds captured stdout

Calls block until the tool exits. There is no timeout.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from tikzembed.core.models import CommandOutcome

logger = logging.getLogger(__name__)


def run_command(args: Sequence[str | Path], cwd: Path | None = None) -> CommandOutcome:
    """Run ``args`` non-interactively and capture its output.

    stdin is closed so a tool waiting for input fails instead of hanging.
    The failure message is stdout verbatim; stderr is used only when the
    tool wrote nothing to stdout.

    Args:
        args: Program followed by its arguments.
        cwd: Working directory for the child process.

    Returns:
        CommandOutcome tagged ok / spawn_error / exit_error.
    """
    argv = [str(a) for a in args]
    program = argv[0]
    logger.debug("Running %s", " ".join(argv))

    try:
        completed = subprocess.run(
            argv,
            cwd=str(cwd) if cwd is not None else None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError as exc:
        logger.debug("Could not start %s: %s", program, exc)
        return CommandOutcome(
            status="spawn_error",
            program=program,
            output=f"failed to invoke {program}: {exc}",
        )

    stdout = _decode(completed.stdout)
    if completed.returncode != 0:
        output = stdout or _decode(completed.stderr)
        logger.debug("%s exited with status %d", program, completed.returncode)
        return CommandOutcome(
            status="exit_error",
            program=program,
            output=output,
            returncode=completed.returncode,
        )

    return CommandOutcome(
        status="ok", program=program, output=stdout, returncode=0,
    )


def _decode(raw: bytes | None) -> str:
    if not raw:
        return ""
    return raw.decode("utf-8", errors="replace")
