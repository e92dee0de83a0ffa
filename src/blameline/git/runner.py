"""Run git commands asynchronously and return their raw text output."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional, Protocol

from ..config import DEFAULT_CONFIG, BlameConfig
from ..exceptions import (
    GitCommandError,
    GitNotFoundError,
    GitOutputTooLargeError,
    GitTimeoutError,
)
from ..logging_config import get_logger

logger = get_logger(__name__)


class BlameSource(Protocol):
    """Supplier of raw git output consumed by :class:`~blameline.service.GitService`."""

    async def blame(self, file_name: str, repo_path: str) -> str: ...

    async def commit_messages(self, file_name: str, repo_path: str) -> str: ...

    async def commit_message(self, sha: str, repo_path: str) -> str: ...

    async def remotes(self, repo_path: str) -> str: ...


class GitRunner:
    """:class:`BlameSource` backed by the git executable.

    Failures are raised, never swallowed: a blame build that cannot get its
    output must fail so the cache can drop it and retry later.
    """

    def __init__(self, config: Optional[BlameConfig] = None):
        self.config = config or DEFAULT_CONFIG

    async def blame(self, file_name: str, repo_path: str) -> str:
        # -f: always show the original file name, -n: original line numbers,
        # --root: no "^" boundary marker; --abbrev=7 prints 8-character shas.
        # A partial blame would drop the tail of the file, so it is never truncated.
        return await self.run(
            ["blame", "-fn", "--root", "--abbrev=7", "--", file_name],
            cwd=repo_path,
            truncate=False,
        )

    async def commit_messages(self, file_name: str, repo_path: str) -> str:
        # same sha length as blame output, so keys match Commit.sha
        return await self.run(
            ["log", "--format=%h %s", "--abbrev=8", "--", file_name], cwd=repo_path
        )

    async def commit_message(self, sha: str, repo_path: str) -> str:
        output = await self.run(["show", "-s", "--format=%B", sha], cwd=repo_path)
        return output.strip()

    async def remotes(self, repo_path: str) -> str:
        return await self.run(["remote", "-v"], cwd=repo_path)

    async def repo_path(self, cwd: str) -> str:
        """Top-level directory of the repository containing ``cwd``."""
        output = await self.run(["rev-parse", "--show-toplevel"], cwd=cwd)
        return Path(output.strip()).as_posix()

    async def run(self, args: list[str], cwd: str, truncate: bool = True) -> str:
        """Run ``git <args>`` in ``cwd`` and return stdout as text.

        Output above ``max_output_mb`` is cut to the limit, or raises
        :class:`GitOutputTooLargeError` when ``truncate`` is False.
        """
        cmd = [self.config.git_path, *args]
        logger.debug("Running %s in %s", " ".join(cmd), cwd)

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            raise GitNotFoundError(self.config.git_path) from None

        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(), timeout=self.config.command_timeout_seconds
            )
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            raise GitTimeoutError(cmd, self.config.command_timeout_seconds) from None

        if proc.returncode != 0:
            error = GitCommandError(cmd, proc.returncode or 0, stderr.decode("utf-8", "replace"))
            logger.warning("%s", error)
            raise error

        limit = self.config.max_output_bytes
        if len(stdout) > limit:
            if not truncate:
                raise GitOutputTooLargeError(cmd, len(stdout), limit)
            logger.warning(
                "git output exceeded %gMB limit, truncating", self.config.max_output_mb
            )
            stdout = stdout[:limit]

        return stdout.decode("utf-8", "replace")
