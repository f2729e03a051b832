"""Tests for 'tasklists list' commands."""

import json

import pytest

from tasklists.cli.lists import list_add, list_color, list_down, list_ls, list_rename, list_rm, list_up
from tasklists.model.loader import load
from tasklists.model.writer import latest_backup_path


def test_list_ls(populated, state_file, args_for, capsys):
    assert list_ls(args_for(state_file)) == 0

    out = capsys.readouterr().out
    assert "Home" in out
    assert "2/3 tasks open" in out
    assert "1/1 task open" in out


def test_list_ls_json(populated, state_file, args_for, capsys):
    assert list_ls(args_for(state_file, json=True)) == 0

    data = json.loads(capsys.readouterr().out)
    assert [item["name"] for item in data] == ["Home", "Work"]
    assert data[0]["id"] == populated["home"]
    assert data[0]["color"] == "blue"
    assert data[0]["open"] == 2
    assert data[0]["tasks"] == 3


def test_list_ls_empty(state_file, args_for, capsys):
    assert list_ls(args_for(state_file)) == 0
    assert "no lists yet" in capsys.readouterr().out
    assert not state_file.exists()


def test_list_add(populated, state_file, args_for, capsys):
    assert list_add(args_for(state_file, name="Garden", color="green")) == 0

    out = capsys.readouterr().out
    assert 'Created list "Garden"' in out
    state = load(state_file)
    assert [lst.name for lst in state.lists] == ["Home", "Work", "Garden"]
    assert state.lists[2].color == "green"
    assert not state.metadata.first_run
    assert latest_backup_path(state_file).exists()


def test_list_add_creates_file(state_file, args_for, capsys):
    assert list_add(args_for(state_file, name="Inbox", color=None)) == 0
    assert [lst.name for lst in load(state_file).lists] == ["Inbox"]


def test_list_add_blank_name(state_file, args_for, capsys):
    with pytest.raises(SystemExit, match="1"):
        list_add(args_for(state_file, name="  ", color=None))
    assert "error: name must not be empty" in capsys.readouterr().err
    assert not state_file.exists()


def test_list_add_blank_name_json(state_file, args_for, capsys):
    with pytest.raises(SystemExit, match="1"):
        list_add(args_for(state_file, json=True, name="", color=None))
    assert json.loads(capsys.readouterr().err) == {"error": "name must not be empty"}


def test_list_rename_by_name_keeps_color(populated, state_file, args_for, capsys):
    assert list_rename(args_for(state_file, id="home", name="House", color=None)) == 0

    assert 'to "House"' in capsys.readouterr().out
    lst = load(state_file).lists[0]
    assert lst.name == "House"
    assert lst.color == "blue"


def test_list_rename_by_id_prefix(populated, state_file, args_for, capsys):
    prefix = populated["work"][:6]
    assert list_rename(args_for(state_file, id=prefix, name="Office", color="red")) == 0
    lst = load(state_file).lists[1]
    assert lst.name == "Office"
    assert lst.color == "red"


def test_list_rename_not_found(populated, state_file, args_for, capsys):
    with pytest.raises(SystemExit, match="1"):
        list_rename(args_for(state_file, id="Nowhere", name="X", color=None))
    assert "list not found" in capsys.readouterr().err


def test_list_color_cycles(populated, state_file, args_for, capsys):
    assert list_color(args_for(state_file, id="Home", color=None)) == 0
    assert "is now green" in capsys.readouterr().out
    assert load(state_file).lists[0].color == "green"


def test_list_color_explicit(populated, state_file, args_for, capsys):
    assert list_color(args_for(state_file, id="Work", color="cyan")) == 0
    assert load(state_file).lists[1].color == "cyan"


def test_list_rm(populated, state_file, args_for, capsys):
    assert list_rm(args_for(state_file, id="Home")) == 0

    assert 'Deleted list "Home" and 3 tasks' in capsys.readouterr().out
    state = load(state_file)
    assert [lst.name for lst in state.lists] == ["Work"]
    assert [t.text for t in state.tasks] == ["Report"]


def test_list_down(populated, state_file, args_for, capsys):
    assert list_down(args_for(state_file, id="Home")) == 0

    assert 'Moved list "Home" down to position 2' in capsys.readouterr().out
    assert [lst.name for lst in load(state_file).lists] == ["Work", "Home"]


def test_list_up_at_top(populated, state_file, args_for, capsys):
    before = state_file.read_bytes()
    with pytest.raises(SystemExit, match="1"):
        list_up(args_for(state_file, id="Home"))
    assert "list is already at top" in capsys.readouterr().err
    assert state_file.read_bytes() == before
