"""
blameline - line authorship from git blame output

Parses raw ``git blame`` output into a per-file authorship model, caches it
per file, projects it onto line ranges, and encodes stable identifiers that
name one commit's revision of a line range. Also parses ``git remote -v``
output into deduplicated, provider-aware remotes.
"""

__version__ = "0.1.0"

from .blame import Author, Blame, BlameCache, Commit, CommitLine, Position, Range, UriKind
from .git import GitRunner, Remote, parse_remotes
from .service import GitService

__all__ = [
    "GitService",  # Main entry point
    "GitRunner",
    "BlameCache",
    "Blame",
    "Author",
    "Commit",
    "CommitLine",
    "Position",
    "Range",
    "UriKind",
    "Remote",
    "parse_remotes",
]
