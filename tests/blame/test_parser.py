"""Tests for blame output tokenizing."""

from datetime import datetime, timedelta, timezone

import pytest

from blameline.blame.parser import (
    BlameRecord,
    BlameRecords,
    parse_blame_date,
    parse_commit_messages,
)


class TestBlameRecords:
    """Tests for BlameRecords."""

    def test_parses_matching_lines(self, blame_output):
        """Every attributed line becomes one record, in file order."""
        records = list(BlameRecords(blame_output))
        assert [r.line for r in records] == [1, 2, 3, 4, 5]
        assert records[0] == BlameRecord(
            sha="a1b2c3d4",
            original_file_name="src/app.py",
            original_line=1,
            author="Alice Smith  ",
            date=datetime(2020, 1, 1, 10, 0, tzinfo=timezone.utc),
            line=1,
            content="import os",
        )

    def test_tab_separated_scenario(self):
        """Fields may be separated by tabs."""
        data = (
            "a1b2c3d4\tfile.txt\t1\t(Alice 2020-01-01 10:00:00 +0000 1)line one\n"
            "a1b2c3d4\tfile.txt\t2\t(Alice 2020-01-01 10:00:00 +0000 2)line two"
        )
        records = list(BlameRecords(data))
        assert len(records) == 2
        assert records[1].content == "line two"
        assert records[1].original_line == 2

    def test_skips_non_matching_lines(self):
        """Headers, blank lines and garbage are ignored, not errors."""
        data = "not blame\n\n12345 short sha line\n"
        assert list(BlameRecords(data)) == []

    def test_empty_input(self):
        assert list(BlameRecords("")) == []
        assert list(BlameRecords(None)) == []

    def test_restartable(self, blame_output):
        """Iterating twice re-scans from the beginning."""
        records = BlameRecords(blame_output)
        assert list(records) == list(records)

    def test_interleaved_scans_are_independent(self, blame_output):
        """Two outputs parsed in lockstep do not disturb each other."""
        other = "deadbeef other.py 1 (Carol 2022-02-02 02:02:02 +0000 1)x\n"
        first = iter(BlameRecords(blame_output))
        second = iter(BlameRecords(other))

        assert next(first).sha == "a1b2c3d4"
        assert next(second).sha == "deadbeef"
        assert next(first).line == 2
        assert list(second) == []
        assert len(list(first)) == 3

    def test_boundary_sha(self):
        """A boundary marker (^) counts as part of the sha."""
        data = "^a1b2c3d file.py 1 (Alice 2020-01-01 10:00:00 +0000 1)x"
        records = list(BlameRecords(data))
        assert records[0].sha == "^a1b2c3d"

    def test_git_separator_space_removed(self):
        """Only the single space git prints after ')' is dropped; indentation stays."""
        data = (
            "a1b2c3d4 f.py 1 (Alice 2020-01-01 10:00:00 +0000 1) x = 1\n"
            "a1b2c3d4 f.py 2 (Alice 2020-01-01 10:00:00 +0000 2)     return x\n"
        )
        assert [r.content for r in BlameRecords(data)] == ["x = 1", "    return x"]

    @pytest.mark.parametrize(
        "date",
        [
            "2020-13-45 10:00:00 +0000",
            "2020-02-30 10:00:00 +0000",
            "2020-01-01 25:00:00 +0000",
            "2020-01-01 10:00:00 +9999",
        ],
    )
    def test_skips_impossible_dates(self, date):
        """A date of the right shape that is not a real time drops only its line."""
        data = (
            "a1b2c3d4 f.py 1 (Alice 2020-01-01 10:00:00 +0000 1)ok\n"
            f"b2c3d4e5 f.py 2 (Bob {date} 2)bad\n"
            "a1b2c3d4 f.py 3 (Alice 2020-01-01 10:00:00 +0000 3)ok again\n"
        )
        assert [r.line for r in BlameRecords(data)] == [1, 3]

    def test_crlf_line_endings(self):
        data = "a1b2c3d4 f.py 1 (Alice 2020-01-01 10:00:00 +0000 1)x\r\n"
        records = list(BlameRecords(data))
        assert records[0].content == "x"


class TestParseBlameDate:
    def test_keeps_offset(self):
        parsed = parse_blame_date("2021-06-15 08:30:00 +0200")
        assert parsed == datetime(2021, 6, 15, 6, 30, tzinfo=timezone.utc)
        assert parsed.utcoffset() == timedelta(hours=2)


class TestParseCommitMessages:
    """Tests for one-line log parsing."""

    def test_maps_sha_to_subject(self):
        data = "a1b2c3d Fix parser\nb2c3d4e Add cache\n"
        assert parse_commit_messages(data) == {
            "a1b2c3d": "Fix parser",
            "b2c3d4e": "Add cache",
        }

    def test_keys_keep_full_abbreviation(self):
        """Keys are as long as git printed them, so they match blame shas."""
        data = "a1b2c3d4 Fix parser\n0123456789abcdef0123456789abcdef01234567 Full sha\n"
        assert list(parse_commit_messages(data)) == [
            "a1b2c3d4",
            "0123456789abcdef0123456789abcdef01234567",
        ]

    def test_ignores_malformed_lines(self):
        data = "garbage\na1b2c3d Fix parser\n\n"
        assert parse_commit_messages(data) == {"a1b2c3d": "Fix parser"}

    def test_empty(self):
        assert parse_commit_messages("") == {}
