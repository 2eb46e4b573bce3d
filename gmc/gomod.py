from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from gmc.errors import ToolInvocationError
from gmc.runner import CommandRunner

logger = logging.getLogger(__name__)

INIT_LABEL = "Failed to initialize Go module"


def init_module(
    module: str,
    workspace: Path,
    *,
    runner: CommandRunner,
    go_bin: str = "go",
) -> None:
    """Run `go mod init <module>` inside `workspace`; writes go.mod."""
    try:
        runner.run([go_bin, "mod", "init", module], cwd=str(workspace), check=True)
    except subprocess.CalledProcessError as e:
        raise ToolInvocationError(INIT_LABEL, tool=go_bin, stderr=e.stderr or "") from e
    except OSError as e:
        # Missing executable and friends.
        raise ToolInvocationError(INIT_LABEL, tool=go_bin, stderr=str(e)) from e
    logger.debug("initialized go module %s in %s", module, workspace)
