from jj_status import cli, jj_adapter
from jj_status.errors import NotARepositoryError

STATUS = "Working copy changes:\n\x1b[36mM\x1b[0m foo.txt\n"
DIFF = "\x1b[1mfoo.txt\x1b[0m --- Text\n1 old\n2 new\n"


def _patch(monkeypatch, root):
    monkeypatch.setattr(cli, "configure_logging", lambda verbosity: None)
    monkeypatch.setattr(jj_adapter, "workspace_root", lambda cwd=None, config=None: str(root))
    monkeypatch.setattr(jj_adapter, "get_status", lambda root, config=None: STATUS)
    monkeypatch.setattr(jj_adapter, "get_diff", lambda root, config=None: DIFF)


def test_cli_prints_collapsed_document(monkeypatch, capsys, tmp_path):
    _patch(monkeypatch, tmp_path)

    assert cli.main([str(tmp_path), "--no-color"]) == 0

    out = capsys.readouterr().out
    assert "M foo.txt" in out
    assert "▸ foo.txt" in out
    assert "2 new" not in out
    assert "\x1b" not in out


def test_cli_expand_shows_bodies(monkeypatch, capsys, tmp_path):
    _patch(monkeypatch, tmp_path)

    assert cli.main([str(tmp_path), "--expand", "--no-color"]) == 0

    out = capsys.readouterr().out
    assert "▾ foo.txt" in out
    assert "2 new" in out


def test_cli_locate_prints_path_and_line(monkeypatch, capsys, tmp_path):
    _patch(monkeypatch, tmp_path)

    # 0-1: status, 2: title, 3: "1 old", 4: "2 new"
    assert cli.main([str(tmp_path), "--expand", "--locate", "4"]) == 0
    assert capsys.readouterr().out.strip() == f"{(tmp_path / 'foo.txt').resolve()}:2"

    assert cli.main([str(tmp_path), "--locate", "2"]) == 0
    assert capsys.readouterr().out.strip() == str((tmp_path / "foo.txt").resolve())


def test_cli_reports_missing_repository(monkeypatch, capsys, tmp_path):
    _patch(monkeypatch, tmp_path)

    def not_a_repo(cwd=None, config=None):
        raise NotARepositoryError(f"not inside a jj repository: {cwd}")

    monkeypatch.setattr(jj_adapter, "workspace_root", not_a_repo)

    assert cli.main([str(tmp_path)]) == 1
    assert "jj-status: error: not inside a jj repository" in capsys.readouterr().err


def test_cli_locate_on_status_line_fails(monkeypatch, capsys, tmp_path):
    _patch(monkeypatch, tmp_path)

    assert cli.main([str(tmp_path), "--locate", "0"]) == 1
    assert "no file" in capsys.readouterr().err


def test_cli_reports_bad_timeout_setting(monkeypatch, capsys, tmp_path):
    _patch(monkeypatch, tmp_path)
    monkeypatch.setenv("JJ_STATUS_TIMEOUT", "abc")

    assert cli.main([str(tmp_path)]) == 1
    assert "jj-status: error: JJ_STATUS_TIMEOUT" in capsys.readouterr().err


def test_locate_help_explains_line_counting():
    help_text = cli.build_arg_parser().format_help()
    assert "below the document" in " ".join(help_text.split())
