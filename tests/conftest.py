"""Shared test fixtures for all test modules."""

from textwrap import dedent

import pytest


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep logs and config lookups inside the test's temporary directory."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("ORG_OUTLINE_LOG_DIR", str(tmp_path / "logs"))
    for var in ("ORG_OUTLINE_STRICT", "ORG_OUTLINE_ENCODING", "ORG_OUTLINE_URL_TIMEOUT",
                "ORG_OUTLINE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def sample_document():
    """A small document touching every container type."""
    return dedent("""\
        #+TITLE: Weekly notes
        Intro paragraph

        * TODO Buy milk :errand:home:
          :PROPERTIES:
          :EFFORT: 15min
          :END:
          SCHEDULED: <2025-01-15 Wed>
        - whole milk
        - oat milk
        * DONE Write script
        #+BEGIN_SRC python
        print("hello")
        #+END_SRC
        | a | b |
        |---+---|
        # reviewed
        """)
