"""
This module implements writing generated content to disk, either as a whole
file or spliced into the tail of an existing file
"""

# Standard
from typing import List, Sequence
import os

# First Party
import alog

log = alog.use_channel("WRITE")


class FileWriteError(OSError):
    """Raised when generated content cannot be written to its target"""


## Interface ###################################################################


def write_file(path: str, text: str):
    """Overwrite the file at the given path with the text, creating parent
    directories as needed
    """
    log.debug("Writing %d characters to %s", len(text), path)
    try:
        dirname = os.path.dirname(path)
        if dirname:
            os.makedirs(dirname, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
    except OSError as err:
        raise FileWriteError(f"failed to write: {path}: {err}") from err


def splice_lines(
    existing_lines: Sequence[str],
    new_lines: Sequence[str],
    marker: str,
) -> List[str]:
    """Replace everything from the first line starting with the marker onward
    with the new lines. If no line has the marker, the new lines are appended.
    """
    for index, line in enumerate(existing_lines):
        if line.startswith(marker):
            log.debug2("Found marker at line %d", index + 1)
            return list(existing_lines[:index]) + list(new_lines)
    log.debug2("No marker found, appending after %d lines", len(existing_lines))
    return list(existing_lines) + list(new_lines)


def splice_file(path: str, new_lines: Sequence[str], marker: str):
    """Splice the new lines into the file at the given path. A missing file is
    treated as empty.
    """
    existing_lines = []
    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8", newline="") as handle:
                content = handle.read()
        except OSError as err:
            raise FileWriteError(f"failed to read: {path}: {err}") from err
        existing_lines = content.split("\n")
        if existing_lines[-1] == "":
            existing_lines.pop()
    write_file(path, "\n".join(splice_lines(existing_lines, new_lines, marker)) + "\n")
