from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from gmc.narration import Narrator
from gmc.templates.registry import TemplateSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreatedEntry:
    kind: str  # "directory" | "file"
    path: Path


def deploy_template_set(
    template_set: TemplateSet,
    dest_root: Path,
    *,
    narrator: Narrator,
) -> list[CreatedEntry]:
    """Materialize `template_set` under `dest_root`.

    Not idempotent: an existing directory or file at any target path raises
    (FileExistsError) and aborts the deploy without cleaning up.
    """
    if not dest_root.is_dir():
        raise NotADirectoryError(f"Destination is not a directory: {dest_root}")

    created: list[CreatedEntry] = []
    for entry in template_set.entries:
        dst = dest_root.joinpath(*entry.path.split("/"))
        if entry.is_dir:
            dst.mkdir(mode=entry.mode)
            os.chmod(dst, entry.mode)
            created.append(CreatedEntry(kind="directory", path=dst))
            narrator.created_dir(str(dst))
        else:
            # "x" mode: never overwrite something that is already there.
            with open(dst, "xb") as f:
                f.write(entry.content or b"")
            os.chmod(dst, entry.mode)
            created.append(CreatedEntry(kind="file", path=dst))
            narrator.created_file(str(dst))

    logger.debug(
        "deployed template set %s into %s (%d entries)",
        template_set.name,
        dest_root,
        len(created),
    )
    return created
