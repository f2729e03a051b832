"""Shared fixtures for CLI tests."""

from argparse import Namespace

import pytest

from tasklists.model.writer import save
from tasklists.service import TaskService


def make_args(state_file, **kwargs):
    """Namespace as the parser would build it for a command."""
    values = {"file": str(state_file), "json": False, "verbose": 0}
    values.update(kwargs)
    return Namespace(**values)


@pytest.fixture
def args_for():
    return make_args


@pytest.fixture
def state_file(tmp_path):
    """Path to a state file that does not exist yet."""
    return tmp_path / "state.json"


@pytest.fixture
def populated(state_file):
    """A state file with Home (Dishes, Laundry, Bins done) and Work (Report).

    Returns a dict of ids by name.
    """
    service = TaskService()
    home = service.create_list("Home", "blue")
    work = service.create_list("Work")
    ids = {"home": home.id, "work": work.id}
    for text in ("Dishes", "Laundry", "Bins"):
        ids[text] = service.create_task(home.id, text).id
    ids["Report"] = service.create_task(work.id, "Report").id
    service.toggle_done(ids["Bins"])
    save(state_file, service.state())
    return ids
