"""CLI behavior tests."""

import json

import pytest

from cowcatalog import cli


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    """Config pointing at a throwaway SQLite file; logging setup disabled."""
    monkeypatch.setattr(cli, "configure_logging", lambda *_args, **_kwargs: None)
    path = tmp_path / "cowcatalog.config.yaml"
    path.write_text(
        f"storage:\n  sqlite_path: {tmp_path / 'herd.db'}\nlogging:\n  level: WARNING\n",
        encoding="utf-8",
    )
    return path


def run(config_path, *argv):
    cli.main(["--config", str(config_path), *argv])


def test_list_shows_seeded_herd(config_path, capsys):
    run(config_path, "list")

    out = capsys.readouterr().out
    assert "TAG-1001" in out
    assert "TAG-1008" in out
    assert "8 of 8 cows shown" in out


def test_list_with_filters_as_json(config_path, capsys):
    run(config_path, "list", "--status", "In Treatment", "--pen", "Pen C", "--format", "json")

    cows = json.loads(capsys.readouterr().out)
    assert [cow["earTag"] for cow in cows] == ["TAG-1007"]


def test_list_no_matches(config_path, capsys):
    run(config_path, "list", "--search", "zzz")

    assert "No cows match the current filters." in capsys.readouterr().out


def test_add_then_show(config_path, capsys):
    run(config_path, "add", "--ear-tag", "TAG-9001", "--sex", "Female", "--pen", "Pen D", "--weight", "455")
    assert "Added TAG-9001 to Pen D" in capsys.readouterr().out

    run(config_path, "show", "TAG-9001")
    out = capsys.readouterr().out
    assert "Cow TAG-9001:" in out
    assert "Weight: 455 kg" in out
    assert "(none)" in out


def test_add_duplicate_exits_with_error(config_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        run(config_path, "add", "--ear-tag", "TAG-1001", "--sex", "Male", "--pen", "Pen A")

    assert exc_info.value.code == 1
    assert "This ear tag is already in use." in capsys.readouterr().err


def test_add_invalid_weight_exits_before_touching_store(config_path, capsys, tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        run(config_path, "add", "--ear-tag", "TAG-9", "--sex", "Male", "--pen", "Pen A", "--weight", "0")

    assert exc_info.value.code == 2
    assert "weight" in capsys.readouterr().err
    assert not (tmp_path / "herd.db").exists()


def test_show_unknown_cow(config_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        run(config_path, "show", "TAG-0000")

    assert exc_info.value.code == 1
    assert "No cow with ear tag TAG-0000" in capsys.readouterr().err


def test_show_json_lists_events_newest_first(config_path, capsys):
    run(config_path, "show", "TAG-1005", "--format", "json")

    payload = json.loads(capsys.readouterr().out)
    assert payload["earTag"] == "TAG-1005"
    assert [event["id"] for event in payload["events"]] == ["e9", "e10", "e11"]


def test_log_event_persists(config_path, capsys):
    run(
        config_path,
        "log-event",
        "TAG-1002",
        "--type",
        "Pen Move",
        "--description",
        "Moved to Pen C",
        "--date",
        "2030-01-01T00:00:00Z",
    )
    assert "Logged Pen Move for TAG-1002" in capsys.readouterr().out

    run(config_path, "show", "TAG-1002", "--format", "json")
    payload = json.loads(capsys.readouterr().out)
    assert payload["events"][0]["description"] == "Moved to Pen C"
    assert payload["events"][0]["date"].startswith("2030-01-01T00:00:00")


def test_log_event_bad_date(config_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        run(config_path, "log-event", "TAG-1002", "--type", "Death", "--date", "soon")

    assert exc_info.value.code == 2


def test_pens(config_path, capsys):
    run(config_path, "pens")

    assert capsys.readouterr().out.splitlines() == ["Pen A", "Pen B", "Pen C"]


def test_export_to_file(config_path, capsys, tmp_path):
    out_path = tmp_path / "exports" / "snapshot.json"

    run(config_path, "export", "--out", str(out_path))

    assert "Exported 8 cows" in capsys.readouterr().out
    assert len(json.loads(out_path.read_text(encoding="utf-8"))) == 8


def test_init_copies_example(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "cowcatalog.config.example.yaml").write_text("storage:\n  backend: memory\n", encoding="utf-8")

    cli.main(["init"])
    cli.main(["init"])

    out = capsys.readouterr().out
    assert "Created cowcatalog.config.yaml" in out
    assert "Skipped cowcatalog.config.yaml" in out
    assert (tmp_path / "cowcatalog.config.yaml").read_text(encoding="utf-8") == "storage:\n  backend: memory\n"


def test_no_command_prints_help(capsys):
    cli.main([])

    assert "usage:" in capsys.readouterr().out
