"""
Open status documents and their refresh cycle.

The session owns the map from workspace root to its current Document.
Entries are created on open, replaced wholesale on each refresh and
dropped on close. The pipeline for a refresh is:

  - ask jj for status, then for the diff (one after the other),
  - split the diff into per-file records,
  - assemble a new Document and swap it in.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from dataclasses import dataclass
from typing import Dict, Optional, Set

from . import jj_adapter
from .ansi import normalize
from .config import Config
from .diff_parser import parse_diff
from .document import Document, assemble
from .errors import JjStatusError, RefreshInProgressError
from .line_refs import LineReference, locate
from .naming import name_for

LOG = logging.getLogger(__name__)


@dataclass
class OpenDocument:
    """A workspace root, its display name and its current document."""

    root: str
    name: str
    document: Document


def build_document(root: str, config: Config) -> Document:
    """
    Run jj for root and assemble a fresh Document.
    """

    status_text = jj_adapter.get_status(root, config=config)
    diff_text = jj_adapter.get_diff(root, config=config)

    document = assemble(normalize(status_text), parse_diff(diff_text))
    if config.expand:
        document.expand_all()
    return document


class StatusSession:
    """
    Tracks open documents, one per workspace root.

    A refresh of a given root may not start while another refresh of the
    same root is still running.
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config or Config()
        self._open: Dict[str, OpenDocument] = {}
        self._refreshing: Set[str] = set()
        self._lock = threading.Lock()

    def open(self, path: Optional[str] = None) -> OpenDocument:
        """
        Open (or reopen) the status document for the workspace at path.
        """

        root = jj_adapter.workspace_root(cwd=path or os.getcwd(), config=self.config)
        existing = self._open.get(root)
        name = existing.name if existing else name_for(root, self.names())

        self.refresh(root, _name=name)
        return self._open[root]

    def refresh(self, root: str, _name: Optional[str] = None) -> Document:
        """
        Rebuild the document for root and replace the stored one.

        Raises RefreshInProgressError if root is already being refreshed.
        """

        with self._lock:
            if root in self._refreshing:
                raise RefreshInProgressError(f"a refresh of {root} is already running")
            self._refreshing.add(root)

        started = time.monotonic()
        try:
            document = build_document(root, self.config)
        finally:
            with self._lock:
                self._refreshing.discard(root)

        with self._lock:
            existing = self._open.get(root)
            if existing is not None:
                existing.document = document
            else:
                name = _name or name_for(root, self.names())
                self._open[root] = OpenDocument(root=root, name=name, document=document)

        LOG.info(
            "refreshed %s: %d file section(s) in %.2fs",
            root,
            len(document.file_sections),
            time.monotonic() - started,
        )
        return document

    def close(self, root: str) -> None:
        self._open.pop(root, None)

    def names(self) -> Dict[str, str]:
        """Map each display name in use to its workspace root."""

        return {entry.name: entry.root for entry in self._open.values()}

    def document(self, root: str) -> Document:
        entry = self._open.get(root)
        if entry is None:
            raise JjStatusError(f"no open document for {root}")
        return entry.document

    def locate(self, root: str, line_index: int) -> LineReference:
        return locate(self.document(root), line_index)
