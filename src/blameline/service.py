"""Blame and remote queries for one repository.

:class:`GitService` wires a raw-output source (normally :class:`GitRunner`)
to the blame parser, the coalescing cache, the range projector and the
identifier codec. Hosts call :meth:`GitService.on_document_closed` and
:meth:`GitService.on_document_saved` to keep cached blames fresh.
"""

from __future__ import annotations

from typing import Optional

from .blame import projection, uri
from .blame.aggregator import build_blame, with_commit_messages
from .blame.cache import BlameCache
from .blame.models import Blame, BlameLine, BlameLines, Commit, Location, Range
from .blame.parser import BlameRecords, parse_commit_messages
from .blame.uri import UriData
from .config import DEFAULT_CONFIG, BlameConfig
from .git.paths import normalize_path
from .git.remotes import ProviderFactory, Remote, parse_remotes
from .git.runner import BlameSource, GitRunner
from .logging_config import get_logger

logger = get_logger(__name__)


class GitService:
    def __init__(
        self,
        repo_path: str,
        source: Optional[BlameSource] = None,
        config: Optional[BlameConfig] = None,
    ):
        self.repo_path = repo_path
        self.config = config or DEFAULT_CONFIG
        self.source: BlameSource = source or GitRunner(self.config)
        self._blames = BlameCache(self._load_blame, normalize=self.normalize_path)

    def normalize_path(self, file_name: str) -> str:
        return normalize_path(file_name, self.repo_path)

    async def _load_blame(self, file_name: str) -> Blame:
        logger.debug("Loading blame for %s in %s", file_name, self.repo_path)
        data = await self.source.blame(file_name, self.repo_path)
        return build_blame(
            BlameRecords(data), file_name, include_content=self.config.include_line_content
        )

    # Document lifecycle

    def on_document_closed(self, file_name: str) -> None:
        self._blames.invalidate(file_name)

    def on_document_saved(self, file_name: str) -> None:
        self._blames.invalidate(file_name)

    def dispose(self) -> None:
        self._blames.clear()

    # Blame queries

    async def get_blame_for_file(self, file_name: str) -> Blame:
        return await self._blames.get(file_name)

    async def get_blame_for_line(self, file_name: str, line: int) -> BlameLine:
        blame = await self.get_blame_for_file(file_name)
        return projection.get_blame_for_line(blame, line)

    async def get_blame_for_range(self, file_name: str, range: Range) -> Blame:
        blame = await self.get_blame_for_file(file_name)
        return projection.get_blame_for_range(blame, range)

    async def get_blame_for_sha_range(self, file_name: str, sha: str, range: Range) -> BlameLines:
        blame = await self.get_blame_for_file(file_name)
        return projection.get_blame_for_sha_range(blame, sha, range)

    async def get_blame_locations(self, file_name: str, range: Range) -> list[Location]:
        blame = await self.get_blame_for_file(file_name)
        return projection.get_blame_locations(blame, range)

    # Commit messages

    async def get_commit_message(self, sha: str) -> str:
        return await self.source.commit_message(sha, self.repo_path)

    async def get_commit_messages(self, file_name: str) -> dict[str, str]:
        """Subjects of the commits touching ``file_name``, keyed like ``Commit.sha``."""
        data = await self.source.commit_messages(self.normalize_path(file_name), self.repo_path)
        return parse_commit_messages(data)

    async def get_blame_with_messages(self, file_name: str) -> Blame:
        """File blame whose commits carry their subjects. The cached model is unchanged."""
        blame = await self.get_blame_for_file(file_name)
        messages = await self.get_commit_messages(file_name)
        return with_commit_messages(blame, messages)

    # Remotes

    async def get_remotes(self, provider_factory: Optional[ProviderFactory] = None) -> list[Remote]:
        data = await self.source.remotes(self.repo_path)
        return parse_remotes(data, self.repo_path, provider_factory)

    # Identifiers

    def to_blame_uri(
        self,
        commit: Commit,
        index: int,
        commit_count: int,
        range: Range,
        original_file_name: Optional[str] = None,
    ) -> str:
        return uri.to_blame_uri(commit, index, commit_count, range, original_file_name)

    def to_git_uri(
        self,
        commit: Commit,
        index: int,
        commit_count: int,
        original_file_name: Optional[str] = None,
    ) -> str:
        return uri.to_git_uri(commit, index, commit_count, original_file_name)

    def from_blame_uri(self, identifier: str) -> UriData:
        return uri.from_blame_uri(identifier)

    def from_git_uri(self, identifier: str) -> UriData:
        return uri.from_git_uri(identifier)
