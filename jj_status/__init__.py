"""
jj-status: structured, collapsible views of `jj status` and `jj diff`.
"""

from .ansi import StyledText, normalize
from .diff_parser import FileDiffRecord, parse_diff
from .document import Document, Section, assemble
from .line_refs import LineReference, current_file_for, resolve_line
from .naming import name_for
from .session import StatusSession

__all__ = [
    "Document",
    "FileDiffRecord",
    "LineReference",
    "Section",
    "StatusSession",
    "StyledText",
    "assemble",
    "current_file_for",
    "name_for",
    "normalize",
    "parse_diff",
    "resolve_line",
]
