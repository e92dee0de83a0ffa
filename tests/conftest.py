"""Shared test fixtures for blameline tests."""

import asyncio

import pytest


# Five lines of src/app.py: three commits, two authors. Line 4 was carried
# over from lib/old_app.py; the header and blank line must be ignored.
BLAME_OUTPUT = (
    "warning: this header is not a blame line\n"
    "a1b2c3d4 src/app.py     1 (Alice Smith   2020-01-01 10:00:00 +0000 1)import os\n"
    "a1b2c3d4 src/app.py     2 (Alice Smith   2020-01-01 10:00:00 +0000 2)\n"
    "\n"
    "b2c3d4e5 src/app.py     3 (Bob Jones     2021-06-15 08:30:00 +0200 3)def main():\n"
    "c3d4e5f6 lib/old_app.py 7 (Alice Smith   2019-03-02 12:00:00 -0500 4)    return 1\n"
    "b2c3d4e5 src/app.py     5 (Bob Jones     2021-06-15 08:30:00 +0200 5)\n"
)


class FakeSource:
    """In-memory BlameSource that records how often each command ran."""

    def __init__(self, blame="", remotes="", messages="", message="", delay=0.0, fail=None):
        self.blame_output = blame
        self.remotes_output = remotes
        self.messages_output = messages
        self.message_output = message
        self.delay = delay
        self.fail = fail
        self.blame_calls: list[str] = []

    async def blame(self, file_name, repo_path):
        self.blame_calls.append(file_name)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail is not None:
            raise self.fail
        return self.blame_output

    async def commit_messages(self, file_name, repo_path):
        return self.messages_output

    async def commit_message(self, sha, repo_path):
        return self.message_output

    async def remotes(self, repo_path):
        return self.remotes_output


@pytest.fixture
def blame_output():
    """Raw blame output for src/app.py."""
    return BLAME_OUTPUT


@pytest.fixture
def app_blame(blame_output):
    """Blame model built from BLAME_OUTPUT."""
    from blameline.blame.aggregator import build_blame
    from blameline.blame.parser import BlameRecords

    return build_blame(BlameRecords(blame_output), "src/app.py")


@pytest.fixture
def make_source():
    """Factory for in-memory BlameSource fakes."""
    return FakeSource
