from .CommitResolver import CommitResolver, parse_change_id
from .GitCommitResolver import GitCommitResolver
from .InMemoryCommitResolver import InMemoryCommit, InMemoryCommitResolver


__all__ = [
    "CommitResolver",
    "parse_change_id",
    "GitCommitResolver",
    "InMemoryCommit",
    "InMemoryCommitResolver",
]
