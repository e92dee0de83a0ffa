"""Git integration: command runner, remote parsing and repository paths."""

from .paths import normalize_path
from .remotes import (
    ProviderFactory,
    Remote,
    RemoteProvider,
    RemoteType,
    RemoteUrl,
    parse_git_url,
    parse_remotes,
)
from .runner import BlameSource, GitRunner

__all__ = [
    "BlameSource",
    "GitRunner",
    "ProviderFactory",
    "Remote",
    "RemoteProvider",
    "RemoteType",
    "RemoteUrl",
    "normalize_path",
    "parse_git_url",
    "parse_remotes",
]
