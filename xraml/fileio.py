"""Small file helpers shared by the package."""

from __future__ import annotations

import os
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


def read_file(path: PathLike) -> str:
    """Return the whole UTF-8 text of ``path``, line endings untouched.

    Raises ``FileNotFoundError`` (or another ``OSError``) when the file cannot
    be read and ``UnicodeDecodeError`` when it is not valid UTF-8.
    """
    with open(path, encoding="utf-8", newline="") as handle:
        return handle.read()