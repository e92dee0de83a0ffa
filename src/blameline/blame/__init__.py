"""Line authorship models built from git blame output."""

from .aggregator import build_blame, with_commit_messages
from .cache import BlameCache
from .models import (
    Author,
    Blame,
    BlameLine,
    BlameLines,
    Commit,
    CommitLine,
    Location,
    Position,
    Range,
)
from .parser import BlameRecord, BlameRecords, parse_commit_messages
from .projection import (
    get_blame_for_line,
    get_blame_for_range,
    get_blame_for_sha_range,
    get_blame_locations,
)
from .uri import DecodeResult, ScopeMismatch, UriData, UriKind

__all__ = [
    "Author",
    "Blame",
    "BlameLine",
    "BlameLines",
    "Commit",
    "CommitLine",
    "Location",
    "Position",
    "Range",
    "BlameCache",
    "BlameRecord",
    "BlameRecords",
    "DecodeResult",
    "ScopeMismatch",
    "UriData",
    "UriKind",
    "build_blame",
    "with_commit_messages",
    "parse_commit_messages",
    "get_blame_for_line",
    "get_blame_for_range",
    "get_blame_for_sha_range",
    "get_blame_locations",
]
