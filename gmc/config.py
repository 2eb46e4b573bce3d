from __future__ import annotations

import logging
import os
from dataclasses import dataclass


def _env_str(name: str) -> str:
    return str(os.environ.get(name) or "").strip()


def editor() -> str | None:
    return _env_str("EDITOR") or None


def git_initial_branch() -> str | None:
    # Unset means: let `git init` pick its own default.
    return _env_str("GMC_GIT_INITIAL_BRANCH") or None


def go_bin() -> str:
    return _env_str("GMC_GO_BIN") or "go"


def git_bin() -> str:
    return _env_str("GMC_GIT_BIN") or "git"


def log_level() -> int:
    raw = _env_str("GMC_LOG_LEVEL").upper()
    if not raw:
        return logging.WARNING
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else logging.WARNING


@dataclass(frozen=True)
class Settings:
    editor: str | None = None
    git_initial_branch: str | None = None
    go_bin: str = "go"
    git_bin: str = "git"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            editor=editor(),
            git_initial_branch=git_initial_branch(),
            go_bin=go_bin(),
            git_bin=git_bin(),
        )
