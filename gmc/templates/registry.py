from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable

from gmc.errors import TemplateNotFoundError

ASSETS_PACKAGE = "gmc.templates"
ASSETS_DIR = "assets"

DEFAULT_TEMPLATE_SET = "default"

DIR_MODE = 0o755
FILE_MODE = 0o644


@dataclass(frozen=True)
class TemplateSetSpec:
    name: str
    label: str
    # CLI switches; the default set is always deployed and has none.
    flag: str | None = None
    short_flag: str | None = None
    # Editor command suggested in the "start coding" next step.
    editor: str | None = None


@dataclass(frozen=True)
class TemplateEntry:
    """One entry of a template set. `content` is None for directories."""

    path: str
    content: bytes | None
    mode: int

    @property
    def is_dir(self) -> bool:
        return self.content is None


@dataclass(frozen=True)
class TemplateSet:
    spec: TemplateSetSpec
    entries: tuple[TemplateEntry, ...]

    @property
    def name(self) -> str:
        return self.spec.name


_SPECS: dict[str, TemplateSetSpec] = {
    "default": TemplateSetSpec(
        name="default",
        label="A place to start writing code: main.go",
    ),
    "nova": TemplateSetSpec(
        name="nova",
        label="Nova editor configuration to build/test/run natively",
        flag="--nova",
        short_flag="-n",
        editor="nova",
    ),
}


def template_set_spec(name: str) -> TemplateSetSpec:
    spec = _SPECS.get(str(name or "").strip())
    if spec is None:
        raise TemplateNotFoundError(name)
    return spec


def optional_template_sets() -> list[TemplateSetSpec]:
    return [s for s in _SPECS.values() if s.name != DEFAULT_TEMPLATE_SET]


def _assets_root() -> Traversable:
    return resources.files(ASSETS_PACKAGE).joinpath(ASSETS_DIR)


def _walk(node: Traversable, prefix: str) -> list[TemplateEntry]:
    out: list[TemplateEntry] = []
    for child in node.iterdir():
        if child.name == "__pycache__":
            continue
        rel = f"{prefix}/{child.name}" if prefix else child.name
        if child.is_dir():
            out.append(TemplateEntry(path=rel, content=None, mode=DIR_MODE))
            out.extend(_walk(child, rel))
        else:
            out.append(TemplateEntry(path=rel, content=child.read_bytes(), mode=FILE_MODE))
    return out


def load_template_set(name: str) -> TemplateSet:
    """Read a bundled template set fully into memory.

    Entries are sorted by their path parts, so a directory always comes
    before anything inside it.
    """
    spec = template_set_spec(name)
    root = _assets_root().joinpath(spec.name)
    if not root.is_dir():
        raise TemplateNotFoundError(spec.name)
    entries = sorted(_walk(root, ""), key=lambda e: e.path.split("/"))
    return TemplateSet(spec=spec, entries=tuple(entries))
