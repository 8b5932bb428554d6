import os

import pytest

from jj_status import jj_adapter
from jj_status.config import Config
from jj_status.errors import JjCommandError, JjStatusError, RefreshInProgressError
from jj_status.line_refs import LineReference
from jj_status.naming import BUFFER_PREFIX
from jj_status.session import StatusSession

STATUS = "Working copy changes:\nM foo.txt\n"
DIFF = "foo.txt --- Text\n1 old\n2 new\n"


def _patch_jj(monkeypatch, status=STATUS, diff=DIFF):
    calls = []

    def fake_root(cwd=None, config=None):
        return os.path.abspath(cwd)

    def fake_status(root, config=None):
        calls.append(("status", root))
        return status

    def fake_diff(root, config=None):
        calls.append(("diff", root))
        return diff

    monkeypatch.setattr(jj_adapter, "workspace_root", fake_root)
    monkeypatch.setattr(jj_adapter, "get_status", fake_status)
    monkeypatch.setattr(jj_adapter, "get_diff", fake_diff)
    return calls


def test_open_builds_named_document(monkeypatch, tmp_path):
    calls = _patch_jj(monkeypatch)
    session = StatusSession()

    opened = session.open(str(tmp_path / "proj"))

    root = str(tmp_path / "proj")
    assert opened.root == root
    assert opened.name == BUFFER_PREFIX + "proj"
    assert [s.title for s in opened.document.file_sections] == ["foo.txt"]
    # status is always fetched before the diff
    assert calls == [("status", root), ("diff", root)]


def test_refresh_replaces_document_wholesale(monkeypatch, tmp_path):
    _patch_jj(monkeypatch)
    session = StatusSession()
    opened = session.open(str(tmp_path))
    old = opened.document

    _patch_jj(monkeypatch, diff="a --- Text\n1 a\nb --- Text\n2 b\n")
    new = session.refresh(opened.root)

    assert new is not old
    assert session.document(opened.root) is new
    assert [s.title for s in new.file_sections] == ["a", "b"]
    assert [s.title for s in old.file_sections] == ["foo.txt"]


def test_reopen_keeps_name_and_same_basename_gets_new_one(monkeypatch, tmp_path):
    _patch_jj(monkeypatch)
    session = StatusSession()

    first = session.open(str(tmp_path / "one" / "proj"))
    again = session.open(str(tmp_path / "one" / "proj"))
    other = session.open(str(tmp_path / "two" / "proj"))

    assert again.name == first.name
    assert other.name == first.name + "<1>"
    assert len(session.names()) == 2


def test_concurrent_refresh_is_rejected(monkeypatch, tmp_path):
    _patch_jj(monkeypatch)
    session = StatusSession()
    opened = session.open(str(tmp_path))
    rejected = []

    def reentrant_status(root, config=None):
        try:
            session.refresh(root)
        except RefreshInProgressError:
            rejected.append(root)
        return STATUS

    monkeypatch.setattr(jj_adapter, "get_status", reentrant_status)
    session.refresh(opened.root)

    assert rejected == [opened.root]


def test_failed_refresh_keeps_old_document_and_releases_guard(monkeypatch, tmp_path):
    _patch_jj(monkeypatch)
    session = StatusSession()
    opened = session.open(str(tmp_path))
    old = opened.document

    def failing_diff(root, config=None):
        raise JjCommandError("jj command failed: jj diff")

    monkeypatch.setattr(jj_adapter, "get_diff", failing_diff)
    with pytest.raises(JjCommandError):
        session.refresh(opened.root)
    assert session.document(opened.root) is old

    _patch_jj(monkeypatch)
    assert session.refresh(opened.root) is not old


def test_close_forgets_document(monkeypatch, tmp_path):
    _patch_jj(monkeypatch)
    session = StatusSession()
    opened = session.open(str(tmp_path))

    session.close(opened.root)

    assert session.names() == {}
    with pytest.raises(JjStatusError):
        session.document(opened.root)


def test_expand_config_and_locate(monkeypatch, tmp_path):
    _patch_jj(monkeypatch)
    session = StatusSession(Config(expand=True))
    opened = session.open(str(tmp_path))

    assert not opened.document.file_sections[0].collapsed
    # 0-1: status, 2: title, 3: "1 old", 4: "2 new"
    assert session.locate(opened.root, 4) == LineReference("foo.txt", 2)


def test_empty_diff_gives_status_only_document(monkeypatch, tmp_path):
    _patch_jj(monkeypatch, status="The working copy has no changes.\n", diff="")
    document = StatusSession().open(str(tmp_path)).document

    assert document.file_sections == []
    assert "no changes" in document.status.body.plain
