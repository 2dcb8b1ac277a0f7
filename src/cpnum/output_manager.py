# output_manager.py

import os

from cpnum.fmt import strip_ansi
from cpnum.workspace import workspace_dir


def resolve_output_path(path: str, workspace_root) -> str:
    """
    Resolve user-provided output path.

    Rules:
    - '~' expanded to user home
    - Absolute paths unchanged
    - Relative paths are relative to workspace_root
    """
    if not path:
        raise ValueError("Output path is empty")

    path = os.path.expanduser(path)
    if os.path.isabs(path):
        return os.path.normpath(path)
    return os.path.normpath(os.path.join(str(workspace_root), path))


class OutputManager:
    """
    Handles result printing to screen and/or an append-only file.

    Usage:
        om = OutputManager(output_file="runs/ncr.txt")
        om.write(10)     # prints and appends to <workspace>/runs/ncr.txt
        om.close()       # separates runs with an empty line
    """

    def __init__(self, output_file: str | None = None, quiet: bool = False):
        """
        Parameters:
            output_file:
                None or ""       => screen only
                path/to/file.txt => append all runs to this file
            quiet: if True, no output to screen (only to file)
        """
        self.quiet = quiet
        self._buffer: list[str] = []
        self._path: str | None = None

        if output_file:
            if output_file.endswith(("/", os.sep)):
                raise ValueError(f"Output target must be a file, not a directory: {output_file}")
            path = resolve_output_path(output_file, workspace_dir())
            parent = os.path.dirname(path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            self._path = path

    @property
    def path(self) -> str | None:
        return self._path

    def write(self, *args, sep: str = " ", end: str = "\n") -> None:
        """Write to screen and file (if configured)."""
        text = sep.join(str(a) for a in args) + end
        self._buffer.append(text)

        if not self.quiet:
            print(text, end="")

        if self._path:
            with open(self._path, "a", encoding="utf-8") as fh:
                fh.write(strip_ansi(text))

    def getvalue(self) -> str:
        """Returns everything written so far."""
        return "".join(self._buffer)

    def close(self) -> None:
        """Add a separator line between runs in the output file."""
        if self._path and self._buffer:
            with open(self._path, "a", encoding="utf-8") as fh:
                fh.write("\n")
