"""
Cross-checks the change ids embedded in a book against the project's history.

The book is expected to walk through the history in order: every commit is
explained exactly once, and chapters never refer back to a commit older than
one already shown. Commits whose title carries the exempt marker (see
`Settings.exempt_title_marker`) may be left out.

"""

from pydantic import BaseModel

from ajimi import markers
from ajimi.commit_resolver import CommitResolver
from ajimi.config import Settings
from ajimi.logger import logger
from ajimi.models import DocumentID, Finding, FindingKind, StableChangeId

INVALID_CHANGE_ID = "invalid"


class BookReference(BaseModel):
    change_id: StableChangeId
    doc_id: DocumentID
    # 1-indexed
    line_number: int


def extract_change_ids(doc_id: DocumentID, lines: list[str]) -> list[BookReference]:
    """
    Find every `ajimi::code change_id` marker of a document, in order.

    """
    references = []
    for line_number, line in enumerate(lines, start=1):
        if f"{markers.CODE_TOKEN} {markers.CHANGE_ID_KEY}" not in line:
            continue
        tokens = line.split(" ")
        change_id = INVALID_CHANGE_ID
        if markers.CHANGE_ID_KEY in tokens:
            rest = tokens[tokens.index(markers.CHANGE_ID_KEY) + 1 :]
            if rest:
                change_id = rest[0]
        references.append(
            BookReference(change_id=change_id, doc_id=doc_id, line_number=line_number)
        )
    return references


class ConsistencyChecker:
    """
    Reports book references that are unknown or out of order, and commits that
    the book never mentions. Never modifies anything.

    """

    def __init__(self, resolver: CommitResolver, settings: Settings | None = None):
        self._resolver = resolver
        self._settings = settings or Settings()

    def check(self, references: list[BookReference]) -> list[Finding]:
        """
        Arguments:
            references: Change ids in the order they appear in the book, across
                all of its documents.

        Returns:
            list[Finding]: Problems with the book references in book order,
                followed by the unexplained commits in chronological order.

        """
        logger.info(f"Total: {len(references)} ajimi change_ids found in the book.")
        # Oldest first, so that the position is the chronological order.
        history = list(reversed(self._resolver.enumerate_history()))
        logger.info(f"Total: {len(history)} ajimi change_ids found in the repo.")
        position = {commit.change_id: i for i, commit in enumerate(history)}

        findings = []
        next_expected_position = 0
        found_ids: set[StableChangeId] = set()
        for ref in references:
            where = f"{ref.change_id} @ {ref.doc_id}:{ref.line_number}"
            if ref.change_id not in position:
                findings.append(
                    Finding(
                        kind=FindingKind.not_found_in_code,
                        message=f"{where}: change_id not found in the code",
                        doc_id=ref.doc_id,
                        line_number=ref.line_number,
                        change_id=ref.change_id,
                    )
                )
                continue
            found_ids.add(ref.change_id)
            if position[ref.change_id] < next_expected_position:
                findings.append(
                    Finding(
                        kind=FindingKind.order_goes_back,
                        message=f"{where}: order should not go back",
                        doc_id=ref.doc_id,
                        line_number=ref.line_number,
                        change_id=ref.change_id,
                    )
                )
            else:
                next_expected_position = position[ref.change_id] + 1

        for commit in history:
            if commit.change_id in found_ids:
                continue
            if self._settings.exempt_title_marker in commit.title:
                continue
            findings.append(
                Finding(
                    kind=FindingKind.not_in_book,
                    message=(
                        "change in code but not in book: "
                        f"{markers.start_marker(commit.change_id)}\n"
                        f"  {commit.title}"
                    ),
                    change_id=commit.change_id,
                )
            )
        return findings
