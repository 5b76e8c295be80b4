from typing import Protocol

from ajimi.exceptions import MalformedMetadataError
from ajimi.models import CommitMetadata, CommitRef, StableChangeId

CHANGE_ID_TRAILER = "Change-Id:"


def parse_change_id(message: str) -> StableChangeId:
    """
    Pull the stable change id out of a commit message's `Change-Id:` trailer.

    Raises:
        MalformedMetadataError: if the message has no (or an empty) trailer.

    """
    for line in message.split("\n"):
        line = line.strip()
        if line.startswith(CHANGE_ID_TRAILER):
            change_id = line[len(CHANGE_ID_TRAILER) :].strip()
            if not change_id:
                raise MalformedMetadataError(
                    f"Change-Id line found but invalid format: {line!r}"
                )
            return change_id
    raise MalformedMetadataError("commit found but does not have Change-Id properly")


class CommitResolver(Protocol):
    """
    A CommitResolver answers the few questions the book needs to ask of a
    project's version-control history.

    Commits are referred to in two ways: by a CommitRef (a hash or any other
    revision the backend understands), which changes whenever history is
    rewritten, and by a StableChangeId, which is carried in the commit
    message's `Change-Id:` trailer and survives rebases. The book only ever
    stores the latter.

    """

    def resolve_stable_id(self, commit_ref: CommitRef) -> StableChangeId:
        """
        Find the change id of the commit that `commit_ref` points to.

        Raises:
            NotFoundError: if the reference does not resolve.
            MalformedMetadataError: if the commit has no Change-Id trailer.

        """
        ...

    def fetch_patch(self, change_id: StableChangeId) -> str:
        """
        Get the patch of the most recent commit carrying `change_id`.

        The text starts with a `<short-hash>: <title>` line, followed by the
        unified diff of the commit. If several commits carry the same id, the
        most recent one wins; this is not detected as an error.

        Raises:
            NotFoundError: if no commit carries `change_id`.

        """
        ...

    def fetch_line(
        self, commit_ref: CommitRef, file_path: str, line_number: int
    ) -> str:
        """
        Get one line (1-indexed, without its newline) of a file as of a commit.

        Raises:
            OutOfRangeError: if `line_number` is not inside the file.
            NotFoundError: if the commit or the file does not exist.

        """
        ...

    def enumerate_history(self) -> list[CommitMetadata]:
        """
        List every commit carrying a change id, newest first.

        """
        ...
