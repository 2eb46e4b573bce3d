import shutil
import subprocess
import sys
from pathlib import Path

import pytest

# Ensure the repo root is on sys.path so tests can import the local `gmc` package.
ROOT = str(Path(__file__).resolve().parents[1])
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from gmc.runner import SubprocessRunner  # noqa: E402

GO_VERSION = "1.22"

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


class FakeRunner:
    """CommandRunner double.

    `go mod init` writes go.mod the way the real tool does. Commands whose
    leading args match a key in `results` return that (returncode, stdout,
    stderr). Everything else goes to `delegate` when given, else succeeds
    with empty output.
    """

    def __init__(self, *, results=None, delegate=None):
        self.calls: list[list[str]] = []
        self.cwds: list[str | None] = []
        self._results = dict(results or {})
        self._delegate = delegate

    def _scripted(self, args):
        for n in range(len(args), 0, -1):
            hit = self._results.get(tuple(args[:n]))
            if hit is not None:
                return hit
        return None

    def run(self, args, *, cwd=None, env=None, check=True):
        self.calls.append(list(args))
        self.cwds.append(cwd)

        hit = self._scripted(args)
        if hit is not None:
            rc, out, err = hit
            if check and rc != 0:
                raise subprocess.CalledProcessError(rc, args, output=out, stderr=err)
            return subprocess.CompletedProcess(args, rc, out, err)

        if list(args[1:3]) == ["mod", "init"]:
            Path(cwd, "go.mod").write_text(f"module {args[3]}\n\ngo {GO_VERSION}\n")
            return subprocess.CompletedProcess(args, 0, "", "")

        if self._delegate is not None:
            return self._delegate.run(args, cwd=cwd, env=env, check=check)
        return subprocess.CompletedProcess(args, 0, "", "")

    def commands(self, tool: str) -> list[list[str]]:
        return [c[1:] for c in self.calls if c and c[0] == tool]


def identity_results(email="dev@example.com", name="Dev"):
    return {
        ("git", "config", "--global", "user.email"): (0, email + "\n", ""),
        ("git", "config", "--global", "user.name"): (0, name + "\n", ""),
    }


def _isolated_git_config(tmp_path_factory, monkeypatch, content: str) -> Path:
    home = tmp_path_factory.mktemp("home")
    cfg = home / ".gitconfig"
    cfg.write_text(content)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(cfg))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    for var in (
        "GIT_AUTHOR_NAME",
        "GIT_AUTHOR_EMAIL",
        "GIT_COMMITTER_NAME",
        "GIT_COMMITTER_EMAIL",
        "GIT_DIR",
        "GIT_WORK_TREE",
    ):
        monkeypatch.delenv(var, raising=False)
    return cfg


@pytest.fixture
def git_identity(tmp_path_factory, monkeypatch) -> Path:
    return _isolated_git_config(
        tmp_path_factory,
        monkeypatch,
        "[user]\n\tname = Test User\n\temail = test@example.com\n"
        "[init]\n\tdefaultBranch = main\n",
    )


@pytest.fixture
def no_git_identity(tmp_path_factory, monkeypatch) -> Path:
    return _isolated_git_config(tmp_path_factory, monkeypatch, "")


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def git_runner() -> FakeRunner:
    # Stubbed `go`, real `git`.
    return FakeRunner(delegate=SubprocessRunner())


@pytest.fixture(autouse=True)
def _no_ambient_gmc_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep the developer's environment out of the assertions.
    for var in ("EDITOR", "GMC_GIT_INITIAL_BRANCH", "GMC_GO_BIN", "GMC_GIT_BIN", "GMC_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
