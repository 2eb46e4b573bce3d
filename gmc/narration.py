from __future__ import annotations

import sys
from typing import TextIO

_KIND_WIDTH = len("directory")


class Narrator:
    """Ordered, unbuffered progress output; silent when quiet."""

    def __init__(self, stream: TextIO | None = None, *, quiet: bool = False) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self.quiet = quiet

    def line(self, text: str = "") -> None:
        if self.quiet:
            return
        self._stream.write(text + "\n")
        self._stream.flush()

    def step(self, text: str) -> None:
        self.line(f"- {text}")

    def created(self, kind: str, path: str) -> None:
        self.step(f"Created {kind:<{_KIND_WIDTH}}: {path}")

    def created_dir(self, path: str) -> None:
        self.created("directory", path)

    def created_file(self, path: str) -> None:
        self.created("file", path)

    def note(self, text: str) -> None:
        self.step(f"NOTE: {text}")

    def next_steps(self, steps: list[str]) -> None:
        if not steps:
            return
        self.line()
        self.line("Next steps:")
        for s in steps:
            self.step(s)
