"""Pytest fixtures shared by all tests."""

import os

import pytest

from tests.helpers import FakeClient, make_database, make_page


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep real tokens, config files and overrides out of every test."""
    for var in ("NOTION_TOKEN", "NOTION_API_KEY"):
        monkeypatch.delenv(var, raising=False)
    for name in list(os.environ):
        if name.startswith("NOTIONLINKS_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def blocks_client():
    """R -Blocks-> B1, B2; B1 -Blocks-> B2."""
    return FakeClient(
        pages=[
            make_page("R", "Root", relations={"Blocks": ["B1", "B2"]}),
            make_page("B1", "Blocker one", relations={"Blocks": ["B2"]}),
            make_page("B2", "Blocker two"),
        ]
    )


@pytest.fixture
def backlink_client():
    """Target T in db-tasks; db-tasks relates to db-projects.

    - P1 (db-projects) relates to T through "Tasks"
    - P2 (db-projects) has no relation to T
    - M1 only mentions T (search hit)
    - P1 is also a search hit
    """
    return FakeClient(
        pages=[
            make_page("T", "Launch plan", database_id="db-tasks"),
            make_page("P1", "Project one", relations={"Tasks": ["T"]}, database_id="db-projects"),
            make_page("P2", "Project two", relations={"Tasks": ["X"]}, database_id="db-projects"),
            make_page("M1", "Notes on launch plan", parent_page_id="T"),
        ],
        databases=[
            make_database("db-tasks", "Tasks", relations={"Project": "db-projects"}),
            make_database("db-projects", "Projects", relations={"Tasks": "db-tasks"}),
        ],
        queries={"db-projects": ["P1", "P2"]},
        search=["T", "M1", "P1"],
    )
