"""Runner for git commands against a local working copy.

Commands are passed as argument lists and executed with ``shell=False``.
Output is redacted of credentials before it is logged, returned or attached
to an exception.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ..errors import GitCommandError
from ..policy.redaction import redact_secrets

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    argv: list[str]
    exit_code: int
    stdout: str
    stderr: str
    duration_ms: int
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class GitRunner:
    """Execute git commands with a fixed timeout and secret redaction."""

    def __init__(self, secrets: Sequence[str] = (), timeout_s: int = 600) -> None:
        self._secrets = [s for s in secrets if s]
        self.timeout_s = timeout_s

    def _env(self) -> dict[str, str]:
        # Never block on a credential prompt; remotes carry the token
        return {**os.environ, "GIT_TERMINAL_PROMPT": "0"}

    def redact(self, text: str) -> str:
        return redact_secrets(text, self._secrets)

    def run(self, argv: Sequence[str], cwd: str | Path, *, check: bool = True) -> CommandResult:
        """Run ``argv`` in ``cwd``.

        With ``check=True`` a non-zero exit raises `GitCommandError`.  The
        argv recorded on the result and the exception is redacted.
        """
        if not argv or argv[0] != "git":
            raise ValueError("GitRunner only accepts git commands")

        safe_argv = [self.redact(arg) for arg in argv]
        logger.debug("Running %s in %s", " ".join(safe_argv), cwd)

        start_ns = time.time_ns()
        timed_out = False
        try:
            proc = subprocess.run(
                list(argv),
                cwd=str(cwd),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                shell=False,
                timeout=self.timeout_s,
                text=True,
                env=self._env(),
            )
            stdout = proc.stdout or ""
            stderr = proc.stderr or ""
            exit_code = proc.returncode
        except subprocess.TimeoutExpired:
            timed_out = True
            stdout = ""
            stderr = f"Command timed out after {self.timeout_s}s"
            exit_code = 124

        result = CommandResult(
            argv=safe_argv,
            exit_code=exit_code,
            stdout=self.redact(stdout),
            stderr=self.redact(stderr),
            duration_ms=int((time.time_ns() - start_ns) / 1_000_000),
            timed_out=timed_out,
        )

        if check and not result.ok:
            logger.debug("Command failed (%s): %s", result.exit_code, result.stderr.strip())
            raise GitCommandError(result.argv, result.exit_code, result.stdout, result.stderr)
        return result
