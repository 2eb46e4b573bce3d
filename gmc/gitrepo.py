from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from gmc.errors import ConfigurationError, RepositoryError
from gmc.narration import Narrator
from gmc.runner import CommandRunner

logger = logging.getLogger(__name__)

GITIGNORE_FILE_NAME = ".gitignore"
README_FILE_NAME = "README.md"
INITIAL_COMMIT_MESSAGE = "Initial commit"
REMOTE_NAME = "origin"
CURRENT_BRANCH_PLACEHOLDER = "$(git branch --show-current)"

# Hosts with a well-known "new repository" page.
_CREATE_REMOTE_PAGES = {
    "github.com": "https://github.com/new",
    "gitlab.com": "https://gitlab.com/projects/new",
    "bitbucket.org": "https://bitbucket.org/repo/create",
}


@dataclass
class RepoResult:
    remote_url: str | None = None
    branch: str | None = None
    next_steps: list[str] = field(default_factory=list)


def remote_url_for(module: str) -> str | None:
    """`host/owner/name` -> `git@host:owner/name.git`; None without a `/`."""
    core = module.replace("/", ":", 1)
    if core == module:
        return None
    return f"git@{core}.git"


def create_remote_page_for(remote_url: str) -> str | None:
    host = remote_url.removeprefix("git@").split(":", 1)[0].lower()
    return _CREATE_REMOTE_PAGES.get(host)


class GitRepoInitializer:
    """Turns a populated workspace into a committed git repository."""

    def __init__(
        self,
        *,
        runner: CommandRunner,
        narrator: Narrator,
        git_bin: str = "git",
        initial_branch: str | None = None,
    ) -> None:
        self._runner = runner
        self._narrator = narrator
        self._git = git_bin
        self._initial_branch = initial_branch

    def _run(self, args: list[str], *, cwd: Path) -> subprocess.CompletedProcess[str]:
        return self._runner.run([self._git, *args], cwd=str(cwd), check=False)

    def _run_step(self, args: list[str], *, cwd: Path, label: str, kind: str) -> str:
        try:
            cp = self._run(args, cwd=cwd)
        except OSError as e:
            raise RepositoryError(label, kind=kind, stderr=str(e), tool=self._git) from e
        if cp.returncode != 0:
            raise RepositoryError(label, kind=kind, stderr=cp.stderr or "", tool=self._git)
        return (cp.stdout or "").strip()

    def check_identity(self, workspace: Path) -> None:
        for key in ("user.email", "user.name"):
            try:
                cp = self._run(["config", "--global", key], cwd=workspace)
            except OSError as e:
                raise RepositoryError(
                    f"Failed to look up Git {key}",
                    kind=RepositoryError.IDENTITY_LOOKUP_FAILED,
                    stderr=str(e),
                    tool=self._git,
                ) from e
            value = (cp.stdout or "").strip()
            # `git config` exits 1 when the key is simply unset.
            if cp.returncode not in (0, 1):
                raise RepositoryError(
                    f"Failed to look up Git {key}",
                    kind=RepositoryError.IDENTITY_LOOKUP_FAILED,
                    stderr=cp.stderr or "",
                    tool=self._git,
                )
            if not value:
                raise ConfigurationError(f"`git config --global {key}` must be set")

    def current_branch(self, workspace: Path) -> str | None:
        try:
            cp = self._run(["symbolic-ref", "--short", "HEAD"], cwd=workspace)
        except OSError:
            logger.debug("could not read current branch in %s", workspace, exc_info=True)
            return None
        if cp.returncode != 0:
            return None
        return (cp.stdout or "").strip() or None

    def _write_file(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")
        path.chmod(0o644)
        self._narrator.created_file(str(path))

    def initialize(self, module: str, workspace: Path) -> RepoResult:
        result = RepoResult()
        base = workspace.name

        self.check_identity(workspace)

        init_args = ["init"]
        if self._initial_branch:
            init_args += ["--initial-branch", self._initial_branch]
        self._run_step(
            init_args,
            cwd=workspace,
            label="Failed to initialize Git repository",
            kind=RepositoryError.INIT_FAILED,
        )
        self._narrator.step("Initialized Git repository")

        # Ignore the binary `go build` produces for this module.
        self._write_file(workspace / GITIGNORE_FILE_NAME, base)
        self._write_file(workspace / README_FILE_NAME, f"# {base}\n\n")

        self._run_step(
            ["add", "."],
            cwd=workspace,
            label="Failed to stage files for Git commit",
            kind=RepositoryError.STAGE_FAILED,
        )
        self._run_step(
            ["commit", "-m", INITIAL_COMMIT_MESSAGE],
            cwd=workspace,
            label="Failed to commit files into Git repository",
            kind=RepositoryError.COMMIT_FAILED,
        )
        self._narrator.step("Committed all files to Git repository")

        url = remote_url_for(module)
        if url is None:
            logger.info("no remote derivable from module name %r", module)
            self._narrator.note("Unable to add remote for Git repository")
            return result

        self._run_step(
            ["remote", "add", REMOTE_NAME, url],
            cwd=workspace,
            label="Failed to add remote for Git repository",
            kind=RepositoryError.REMOTE_FAILED,
        )
        self._narrator.step(f"Added remote for Git repository: {url}")
        result.remote_url = url

        create_step = f"Create remote Git repository {url}"
        page = create_remote_page_for(url)
        if page:
            create_step += f": {page}"
        result.next_steps.append(create_step)

        result.branch = self.current_branch(workspace)
        result.next_steps.append(
            "Push to remote Git repository: $ git push -u "
            f"{REMOTE_NAME} {result.branch or CURRENT_BRANCH_PLACEHOLDER}"
        )
        return result
