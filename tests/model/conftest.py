"""Shared fixtures for model tests."""

from datetime import datetime, timezone

import pytest

from tasklists.model.state import (
    AppState,
    ArchivedEntry,
    Filter,
    Focus,
    Metadata,
    Priority,
    SessionContext,
    Task,
    TaskList,
)

T0 = datetime(2026, 2, 19, 9, 0, tzinfo=timezone.utc)
T1 = datetime(2026, 2, 19, 9, 30, 15, 500000, tzinfo=timezone.utc)


@pytest.fixture
def sample_state():
    """Two lists, four tasks (one done) and one archive entry."""
    return AppState(
        lists=[
            TaskList(id="home", name="Home", color="blue", created_at=T0, updated_at=T0),
            TaskList(id="work", name="Work", created_at=T0, updated_at=T1),
        ],
        tasks=[
            Task(id="t1", list_id="home", text="Dishes", position=1, created_at=T0, updated_at=T0),
            Task(id="t2", list_id="home", text="Laundry", priority=Priority.HIGH, position=2, created_at=T0, updated_at=T0),
            Task(id="t3", list_id="home", text="Bins", done=True, position=3, created_at=T0, updated_at=T1),
            Task(id="t4", list_id="work", text="Report", position=1, created_at=T0, updated_at=T0),
        ],
        archived=[
            ArchivedEntry(
                id="a1",
                task_text="Taxes",
                origin_list="Home",
                origin_list_id="home",
                priority=Priority.MEDIUM,
                done_at=T0,
                archived_at=T1,
            ),
        ],
        filter=Filter.TODO,
        query="dish",
        metadata=Metadata(session=SessionContext(active_list_id="work", focus=Focus.TASKS)),
    )
