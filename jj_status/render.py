"""
rich renderables for jj-status documents.

Used by the CLI. Other front ends can walk Document.lines() themselves.
"""

from __future__ import annotations

from typing import List

from rich.console import Console, Group
from rich.text import Text

from .diff_parser import NO_CHANGES_BODY
from .document import Document, DocumentLine

COLLAPSED_MARKER = "▸"
EXPANDED_MARKER = "▾"


def get_console(no_color: bool = False) -> Console:
    return Console(highlight=False, no_color=no_color, soft_wrap=True)


def render_line(line: DocumentLine) -> Text:
    if not line.is_title:
        return line.text.to_rich()

    marker = COLLAPSED_MARKER if line.section.collapsed else EXPANDED_MARKER
    title = Text(f"{marker} ", style="dim")
    title.append(line.text.plain, style="bold")
    return title


def render_document(document: Document) -> Group:
    """
    Render every visible line of document, in order.
    """

    renderables: List[Text] = [render_line(line) for line in document.lines()]
    if not document.file_sections:
        renderables.append(Text(NO_CHANGES_BODY, style="dim italic"))
    return Group(*renderables)
