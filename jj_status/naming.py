"""
Display names for open status documents.
"""

from __future__ import annotations

from pathlib import PurePath
from typing import Mapping

BUFFER_PREFIX = "jj-status: "


def name_for(project_path: str, open_documents: Mapping[str, str]) -> str:
    """
    Return a unique display name for the document of project_path.

    open_documents maps each name in use to the project path it shows.
    A name already showing project_path is reused, so reopening a
    project is idempotent. Otherwise "<1>", "<2>", ... suffixes are tried
    until a free name turns up.
    """

    base = BUFFER_PREFIX + PurePath(project_path).name

    def acceptable(name: str) -> bool:
        owner = open_documents.get(name)
        return owner is None or owner == project_path

    if acceptable(base):
        return base

    suffix = 1
    while not acceptable(f"{base}<{suffix}>"):
        suffix += 1
    return f"{base}<{suffix}>"
