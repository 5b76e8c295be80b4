from pydantic import BaseModel

from ajimi.commit_resolver.CommitResolver import CommitResolver, parse_change_id
from ajimi.exceptions import MalformedMetadataError, NotFoundError, OutOfRangeError
from ajimi.models import CommitMetadata, CommitRef, StableChangeId


class InMemoryCommit(BaseModel):
    hash: str
    # Full commit message; the first line is the title.
    message: str
    diff: str = ""
    # Snapshot of the tree after this commit, as lines without newlines.
    files: dict[str, list[str]] = {}

    @property
    def title(self) -> str:
        return self.message.split("\n", 1)[0]

    @property
    def short_hash(self) -> str:
        return self.hash[:7]


class InMemoryCommitResolver(CommitResolver):
    """
    This CommitResolver implementation keeps the whole history in a list, and
    answers queries the same way the git-backed resolver does.

    It is intended for primary use in testing and debugging.

    """

    def __init__(self, commits: list[InMemoryCommit] | None = None):
        """
        Create a new InMemoryCommitResolver.

        Arguments:
            commits: The history, oldest commit first (i.e. in the order the
                commits were made).

        """
        self._commits = list(commits or [])

    def commit(self, commit: InMemoryCommit):
        """Append a commit on top of the history."""
        self._commits.append(commit)

    def _lookup(self, commit_ref: CommitRef) -> InMemoryCommit:
        matches = [c for c in self._commits if c.hash.startswith(commit_ref)]
        if not commit_ref or len(matches) != 1:
            raise NotFoundError(f"Unknown commit {commit_ref!r}")
        return matches[0]

    def resolve_stable_id(self, commit_ref: CommitRef) -> StableChangeId:
        return parse_change_id(self._lookup(commit_ref).message)

    def fetch_patch(self, change_id: StableChangeId) -> str:
        for commit in reversed(self._commits):
            if change_id in commit.message:
                return f"{commit.short_hash}: {commit.title}\n\n{commit.diff}"
        raise NotFoundError(f"No commit has change_id {change_id}")

    def fetch_line(
        self, commit_ref: CommitRef, file_path: str, line_number: int
    ) -> str:
        if line_number < 1:
            raise OutOfRangeError(f"line_number {line_number} < 1")
        commit = self._lookup(commit_ref)
        if file_path not in commit.files:
            raise NotFoundError(f"{file_path} not found at {commit_ref}")
        lines = commit.files[file_path]
        if line_number > len(lines):
            raise OutOfRangeError(
                f"{file_path} has {len(lines)} lines at {commit_ref}, "
                f"asked for line {line_number}"
            )
        return lines[line_number - 1]

    def enumerate_history(self) -> list[CommitMetadata]:
        history = []
        for commit in reversed(self._commits):
            try:
                change_id = parse_change_id(commit.message)
            except MalformedMetadataError:
                continue
            history.append(
                CommitMetadata(
                    hash=commit.hash, title=commit.title, change_id=change_id
                )
            )
        return history
