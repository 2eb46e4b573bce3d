"""Module creation: the ordered sequence of steps behind `gmc <module>`.

Steps run strictly in order and the first failure aborts the rest. Nothing
is rolled back; a half-built workspace is left for the user to inspect.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from gmc.config import Settings
from gmc.errors import (
    CreateModuleError,
    GmcError,
    InvalidModuleNameError,
    WorkspaceCreationError,
)
from gmc.gitrepo import GitRepoInitializer, RepoResult
from gmc.gomod import init_module
from gmc.narration import Narrator
from gmc.runner import CommandRunner, SubprocessRunner
from gmc.templates import (
    DEFAULT_TEMPLATE_SET,
    TemplateSet,
    deploy_template_set,
    load_template_set,
)

logger = logging.getLogger(__name__)

EDITOR_PLACEHOLDER = "$EDITOR"

STEP_RESOLVE = "resolve module"
STEP_WORKSPACE = "create module directory"
STEP_GO_MOD = "initialize Go module"
STEP_GIT = "create Git repository"


@dataclass(frozen=True)
class CreateOptions:
    optional_sets: tuple[str, ...] = ()
    git: bool = False
    # Only consulted when `git` is set; None defers to git's own default.
    initial_branch: str | None = None
    quiet: bool = False


@dataclass
class CreateResult:
    module: str
    workspace: Path
    template_sets: list[str] = field(default_factory=list)
    repo: RepoResult | None = None
    next_steps: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class _Step:
    name: str
    action: Callable[[], None]
    error_prefix: str = ""


def module_base_name(module: str) -> str:
    """Last path segment of `module`; it names the workspace directory."""
    base = posixpath.basename(str(module or "").rstrip("/"))
    if not base.strip() or base in (".", "..") or "\\" in base or "\0" in base:
        raise InvalidModuleNameError(module)
    return base


def normalize_optional_sets(names: Iterable[str]) -> tuple[str, ...]:
    """Drop duplicates and the always-deployed default set, keeping order."""
    out: list[str] = []
    for raw in names:
        name = str(raw or "").strip()
        if not name or name == DEFAULT_TEMPLATE_SET or name in out:
            continue
        out.append(name)
    return tuple(out)


def _editor_for(template_sets: list[TemplateSet], settings: Settings) -> str:
    for ts in template_sets:
        if ts.spec.editor:
            return ts.spec.editor
    return settings.editor or EDITOR_PLACEHOLDER


def _make_workspace(workspace: Path, narrator: Narrator) -> None:
    try:
        workspace.mkdir(mode=0o755)
    except OSError as e:
        raise WorkspaceCreationError(str(workspace), e) from e
    narrator.created_dir(str(workspace))


def create_module(
    module: str,
    options: CreateOptions | None = None,
    *,
    output: TextIO | None = None,
    parent_dir: Path | None = None,
    settings: Settings | None = None,
    runner: CommandRunner | None = None,
) -> CreateResult:
    """Create the workspace for `module` and populate it.

    Raises CreateModuleError naming the failed step; narration written so
    far stays in `output`.
    """
    module = str(module or "").strip()
    opts = options or CreateOptions()
    out = Narrator(output, quiet=opts.quiet)
    cfg = settings or Settings()
    r = runner or SubprocessRunner()

    out.line(f"Creating Go module: {module}")

    # Resolve the name and every template set before anything touches the
    # filesystem.
    try:
        base = module_base_name(module)
        optional = [load_template_set(n) for n in normalize_optional_sets(opts.optional_sets)]
        template_sets = [load_template_set(DEFAULT_TEMPLATE_SET), *optional]
    except GmcError as e:
        raise CreateModuleError(module, step=STEP_RESOLVE, error=e) from e

    workspace = (parent_dir or Path(".")) / base
    result = CreateResult(
        module=module,
        workspace=workspace,
        template_sets=[ts.name for ts in template_sets],
    )

    def _init_go_module() -> None:
        init_module(module, workspace, runner=r, go_bin=cfg.go_bin)
        out.step("Initialized Go module")

    def _deploy(ts: TemplateSet) -> Callable[[], None]:
        def action() -> None:
            deploy_template_set(ts, workspace, narrator=out)

        return action

    def _init_repo() -> None:
        repo = GitRepoInitializer(
            runner=r,
            narrator=out,
            git_bin=cfg.git_bin,
            initial_branch=opts.initial_branch,
        )
        result.repo = repo.initialize(module, workspace)
        result.next_steps.extend(result.repo.next_steps)

    steps = [
        _Step(STEP_WORKSPACE, lambda: _make_workspace(workspace, out)),
        _Step(STEP_GO_MOD, _init_go_module),
        *[
            _Step(
                f"deploy template set {ts.name}",
                _deploy(ts),
                error_prefix=f"Failed to copy template set {ts.name}: ",
            )
            for ts in template_sets
        ],
    ]
    if opts.git:
        steps.append(
            _Step(STEP_GIT, _init_repo, error_prefix="Failed to create as Git repository: ")
        )

    for step in steps:
        logger.debug("step: %s", step.name)
        try:
            step.action()
        except (OSError, GmcError) as e:
            logger.debug("step %r failed for %s", step.name, module, exc_info=True)
            raise CreateModuleError(
                module, step=step.name, error=e, prefix=step.error_prefix
            ) from e

    out.line()
    out.line(f"Finished creating Go module: {module}")

    result.next_steps.append(f"Start coding: $ {_editor_for(optional, cfg)} {base}")
    out.next_steps(result.next_steps)
    return result
