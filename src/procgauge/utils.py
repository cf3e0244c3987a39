"""Shared utility functions."""

from __future__ import annotations

import os
import sys


def write_text(path: str, data: str) -> None:
    """Replace the contents of *path* with *data*."""
    with open(path, "w") as f:
        f.write(data)


def output_text(data: str, output_file: str | None = None) -> None:
    """Write *data* to *output_file* (append) or stdout."""
    if output_file:
        mode = "a" if os.path.exists(output_file) else "w"
        with open(output_file, mode) as f:
            f.write(data + "\n")
    else:
        sys.stdout.write(data + "\n")
        sys.stdout.flush()
