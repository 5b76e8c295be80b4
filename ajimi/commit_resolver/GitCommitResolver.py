"""
Reads the history of a local git checkout using gitpython.

Like `git diff` line numbers, most of what the book needs is only available
through git's porcelain output, so this goes through the `repo.git.<command>`
pass-through rather than gitpython's object model.

"""

import pathlib

from git import Repo, GitCommandError  # type: ignore

from ajimi.commit_resolver.CommitResolver import CommitResolver, parse_change_id
from ajimi.exceptions import MalformedMetadataError, NotFoundError, OutOfRangeError
from ajimi.logger import logger
from ajimi.models import CommitMetadata, CommitRef, StableChangeId

# ASCII unit/record separators keep multi-line commit bodies unambiguous.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_HISTORY_FORMAT = f"--format=%H{_FIELD_SEP}%s{_FIELD_SEP}%B{_RECORD_SEP}"


def _checked_ref(commit_ref: CommitRef) -> CommitRef:
    # A reference taken from a document must never reach git as an option.
    if not commit_ref or commit_ref.startswith("-"):
        raise NotFoundError(f"Invalid commit reference {commit_ref!r}")
    return commit_ref


class GitCommitResolver(CommitResolver):
    """
    A CommitResolver backed by a git repository on disk. Every query runs a
    fresh `git` subprocess; nothing is cached between calls.

    """

    def __init__(self, repo_path: pathlib.Path | str):
        """
        Arguments:
            repo_path: Path to the working tree (or bare repo) of the project
                whose history the book describes.

        """
        self._repo_path = pathlib.Path(repo_path)
        self._repo = Repo(self._repo_path, search_parent_directories=True)

    def resolve_stable_id(self, commit_ref: CommitRef) -> StableChangeId:
        commit_ref = _checked_ref(commit_ref)
        try:
            message = self._repo.git.log("-1", "--format=%B", commit_ref, "--")
        except GitCommandError as e:
            raise NotFoundError(f"git cmd failed for {commit_ref}: {e.stderr}") from e
        return parse_change_id(message)

    def fetch_patch(self, change_id: StableChangeId) -> str:
        try:
            output = self._repo.git.log(
                "-1",
                "-p",
                "--fixed-strings",
                f"--grep={change_id}",
                "--pretty=%h: %s",
            )
        except GitCommandError as e:
            raise NotFoundError(f"git cmd failed for {change_id}: {e.stderr}") from e
        if not output.strip():
            raise NotFoundError(f"No commit has change_id {change_id}")
        return output

    def fetch_line(
        self, commit_ref: CommitRef, file_path: str, line_number: int
    ) -> str:
        if line_number < 1:
            raise OutOfRangeError(f"line_number {line_number} < 1")
        commit_ref = _checked_ref(commit_ref)
        try:
            content = self._repo.git.show(f"{commit_ref}:{file_path}")
        except GitCommandError as e:
            raise NotFoundError(
                f"{file_path} not found at {commit_ref}: {e.stderr}"
            ) from e
        lines = content.split("\n")
        if line_number > len(lines):
            raise OutOfRangeError(
                f"{file_path} has {len(lines)} lines at {commit_ref}, "
                f"asked for line {line_number}"
            )
        return lines[line_number - 1]

    def enumerate_history(self) -> list[CommitMetadata]:
        try:
            output = self._repo.git.log(_HISTORY_FORMAT)
        except GitCommandError as e:
            # An empty repository has no HEAD to walk from.
            logger.debug(f"git log failed in {self._repo_path}: {e}")
            return []

        history = []
        for record in output.split(_RECORD_SEP):
            record = record.strip("\n")
            if not record:
                continue
            hash_, title, message = record.split(_FIELD_SEP, 2)
            try:
                change_id = parse_change_id(message)
            except MalformedMetadataError:
                logger.debug(f"Commit {hash_} has no Change-Id, skipping.")
                continue
            history.append(CommitMetadata(hash=hash_, title=title, change_id=change_id))
        return history
