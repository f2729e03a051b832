"""Tests for 'tasklists archive' commands."""

import json

import pytest

from tasklists.cli.archive import archive_all, archive_clear, archive_ls
from tasklists.model.loader import load


def test_archive_ls_empty(populated, state_file, args_for, capsys):
    assert archive_ls(args_for(state_file, list=None)) == 0
    assert "archive is empty" in capsys.readouterr().out


def test_archive_clear(populated, state_file, args_for, capsys):
    assert archive_clear(args_for(state_file, list_id="Home")) == 0

    assert "Archived completed: 1 task" in capsys.readouterr().out
    state = load(state_file)
    assert [e.task_text for e in state.archived] == ["Bins"]
    assert state.archived[0].origin_list_id == populated["home"]
    assert "Bins" not in [t.text for t in state.tasks]


def test_archive_clear_nothing_done(populated, state_file, args_for, capsys):
    with pytest.raises(SystemExit, match="1"):
        archive_clear(args_for(state_file, list_id="Work"))
    assert "no completed tasks to clear" in capsys.readouterr().err


def test_archive_all_json(populated, state_file, args_for, capsys):
    assert archive_all(args_for(state_file, json=True, list_id="Home")) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["listId"] == populated["home"]
    assert sorted(e["taskText"] for e in data["archived"]) == ["Bins", "Dishes", "Laundry"]
    assert all(e["originList"] == "Home" for e in data["archived"])
    assert [t.text for t in load(state_file).tasks] == ["Report"]


def test_archive_ls_by_list(populated, state_file, args_for, capsys):
    archive_clear(args_for(state_file, list_id="Home"))
    archive_all(args_for(state_file, list_id="Work"))
    capsys.readouterr()

    assert archive_ls(args_for(state_file, list=None)) == 0
    out = capsys.readouterr().out
    assert out.index("Report") < out.index("Bins")

    assert archive_ls(args_for(state_file, json=True, list="Home")) == 0
    data = json.loads(capsys.readouterr().out)
    assert [e["taskText"] for e in data] == ["Bins"]


def test_archive_ls_unknown_list(populated, state_file, args_for, capsys):
    with pytest.raises(SystemExit, match="1"):
        archive_ls(args_for(state_file, list="Garden"))
    assert "list not found" in capsys.readouterr().err
