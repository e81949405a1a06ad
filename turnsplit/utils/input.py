"""Reading transcript text for the CLI."""

from __future__ import annotations

import sys
from pathlib import Path

STDIN_MARKER = "-"


class InputTooLargeError(ValueError):
    """Raised when transcript input exceeds the configured byte cap."""


def read_transcript(source: str, *, max_bytes: int) -> str:
    """Reads UTF-8 text from a file path, or from stdin when ``source`` is ``-``.

    Raises:
        FileNotFoundError: If ``source`` names a missing file.
        InputTooLargeError: If the encoded text is larger than ``max_bytes``.
    """
    if source == STDIN_MARKER:
        text = sys.stdin.read()
    else:
        text = Path(source).read_text(encoding="utf-8")

    size = len(text.encode("utf-8"))
    if size > max_bytes:
        raise InputTooLargeError(
            f"Input is {size} bytes, larger than the {max_bytes}-byte limit."
        )
    return text
