"""
Mapping document positions back to source locations.

Two kinds of diff lines carry a usable line number: lines that start
with an explicit number printed by the diff renderer (difftastic's
format), and unified-diff hunk headers. Lines inside a unified hunk are
not counted forward; callers get the hunk start.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .ansi import strip_ansi
from .document import Document, Section
from .errors import JumpError

LOG = logging.getLogger(__name__)

_NUMBERED_LINE_RE = re.compile(r"^\s*(?P<line>\d+)\s")
_HUNK_HEADER_RE = re.compile(r"^@@ .*?\+(?P<line>\d+)")


@dataclass(frozen=True)
class LineReference:
    """A file relative to the workspace root and an optional 1-based line."""

    file_identifier: str
    line_number: Optional[int] = None


def resolve_line(line_text: str) -> Optional[int]:
    """
    Return the source line number a diff line points at, if any.

    Explicit per-line numbers win over hunk headers.
    """

    plain = strip_ansi(line_text)

    match = _NUMBERED_LINE_RE.match(plain)
    if match:
        return int(match.group("line"))

    match = _HUNK_HEADER_RE.match(plain)
    if match:
        return int(match.group("line"))

    return None


def current_file_for(section: Optional[Section]) -> Optional[str]:
    """Return the identifier of the nearest enclosing file section."""

    if section is None:
        return None
    for node in section.ancestors():
        if node.kind == "file":
            return node.value
    return None


def locate(document: Document, line_index: int) -> LineReference:
    """
    Resolve visible document line line_index to a LineReference.

    A missing line number degrades to a file-only reference; a missing
    file raises JumpError.
    """

    doc_line = document.line_at(line_index)
    file_identifier = current_file_for(doc_line.section if doc_line else None)
    line_number = None
    if doc_line is not None and not doc_line.is_title:
        line_number = resolve_line(doc_line.text.plain)

    if file_identifier is None:
        if line_number is None:
            raise JumpError(f"no file or line number at document line {line_index}")
        raise JumpError(
            f"found line {line_number} but no file at document line {line_index}"
        )

    if line_number is None:
        LOG.warning("no line number at document line %d; opening %s", line_index, file_identifier)

    return LineReference(file_identifier=file_identifier, line_number=line_number)


def source_path(root: Union[str, Path], reference: LineReference) -> Path:
    return (Path(root) / reference.file_identifier).resolve()
