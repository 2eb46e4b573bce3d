from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    def run(
        self,
        args: list[str],
        *,
        cwd: str | None = None,
        env: dict[str, str] | None = None,
        check: bool = True,
    ) -> subprocess.CompletedProcess[str]: ...


@dataclass
class SubprocessRunner:
    def run(
        self,
        args: list[str],
        *,
        cwd: str | None = None,
        env: dict[str, str] | None = None,
        check: bool = True,
    ) -> subprocess.CompletedProcess[str]:
        logger.debug("run %s (cwd=%s)", args, cwd)
        cp = subprocess.run(
            args,
            cwd=cwd,
            env=env,
            text=True,
            capture_output=True,
            check=False,
        )
        if cp.returncode != 0:
            logger.debug(
                "command %s exited %d: %s", args, cp.returncode, (cp.stderr or "").strip()
            )
            if check:
                raise subprocess.CalledProcessError(
                    cp.returncode, args, output=cp.stdout, stderr=cp.stderr
                )
        return cp
