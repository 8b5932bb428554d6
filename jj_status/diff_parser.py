"""
Diff splitting for jj-status.

The parser cuts the raw output of `jj diff --tool <tool>` into one
record per file. It understands two file header forms:

  - difftastic's native header, `<path> --- <language>`;
  - the git-style header, `diff --git a/<path> b/<path>`.

It does not look inside hunks. Bodies keep the raw (possibly colored)
text so the document layer can normalize them for display.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from .ansi import strip_ansi

LOG = logging.getLogger(__name__)

NO_CHANGES = "No changes"
NO_CHANGES_BODY = "No differences found in the current change."
PREAMBLE = "Changes"
RAW_OUTPUT = "Raw Diff Output"

_TOOL_HEADER_RE = re.compile(r"^(?P<path>\S+) --- (?P<rest>.*)$")
_GIT_HEADER_RE = re.compile(r"^diff --git a/(?P<path>\S+) b/(?P<path_new>\S+)")


@dataclass(frozen=True)
class FileDiffRecord:
    """
    The part of a diff stream that belongs to a single file.

    file_identifier is a path relative to the workspace root, or one of
    the placeholder labels when no file header was found. body is the
    raw diff text for the file, header line included.
    """

    file_identifier: str
    body: str


def header_identifier(line: str) -> Optional[str]:
    """
    Return the file path if line starts a new file, else None.

    The tool-native form is checked before the git form, so a line never
    starts two records.
    """

    plain = strip_ansi(line)

    match = _TOOL_HEADER_RE.match(plain)
    if match:
        return match.group("path")

    match = _GIT_HEADER_RE.match(plain)
    if match:
        return match.group("path")

    return None


def parse_diff(diff_text: str) -> List[FileDiffRecord]:
    """
    Split diff_text into FileDiffRecords in order of first appearance.

    The result is never empty: blank input gives a single "No changes"
    record and input without any recognized file header comes back
    verbatim as a single "Raw Diff Output" record.
    """

    if not diff_text.strip():
        return [FileDiffRecord(NO_CHANGES, NO_CHANGES_BODY)]

    lines = diff_text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    records: List[FileDiffRecord] = []
    current_identifier: Optional[str] = None
    current_lines: List[str] = []
    saw_header = False

    for line in lines:
        identifier = header_identifier(line)

        if identifier is not None:
            if current_identifier is not None:
                records.append(FileDiffRecord(current_identifier, "\n".join(current_lines)))
            saw_header = True
            current_identifier = identifier
            current_lines = [line]
            continue

        if current_identifier is None:
            if not line.strip():
                continue
            # Output before the first header still gets a section.
            current_identifier = PREAMBLE
            current_lines = []

        current_lines.append(line)

    if current_identifier is not None:
        records.append(FileDiffRecord(current_identifier, "\n".join(current_lines)))

    if not saw_header:
        LOG.debug("no file headers recognized; keeping raw diff output")
        return [FileDiffRecord(RAW_OUTPUT, diff_text)]

    LOG.debug("parsed %d file record(s) from diff", len(records))
    return records
