from pydantic import BaseModel

from ajimi.book import Book
from ajimi.checker import (
    ConsistencyChecker,
    allowed_block_languages,
    check_block_languages,
    check_image_captions,
    extract_change_ids,
)
from ajimi.commit_resolver import CommitResolver
from ajimi.config import Settings
from ajimi.logger import logger
from ajimi.models import Finding
from ajimi.rewriter import RegionRewriter


class CheckReport(BaseModel):
    generated_code: list[Finding] = []
    block_languages: list[Finding] = []
    image_captions: list[Finding] = []

    @property
    def ok(self) -> bool:
        return not (self.generated_code or self.block_languages or self.image_captions)


def fix_book(book: Book, resolver: CommitResolver):
    """
    Regenerate every generated region of every document in the book.

    Documents are processed one at a time: each is read, rewritten in memory
    and written back before the next one is opened, so a failure leaves the
    documents before it updated and the ones after it untouched.

    """
    rewriter = RegionRewriter(resolver)
    for doc_id in book.list_doc_ids():
        logger.info(f"fix: {doc_id}")
        lines = rewriter.rewrite(book.get_lines(doc_id))
        book.set_lines(doc_id, lines)


def check_book(
    book: Book, resolver: CommitResolver, settings: Settings | None = None
) -> CheckReport:
    """
    Run every check over the book. All three passes always run, so a single
    invocation reports every problem at once.

    """
    settings = settings or Settings()
    doc_ids = book.list_doc_ids()
    logger.info(f"checking {len(doc_ids)} files...")

    references = []
    report = CheckReport()
    allowed = allowed_block_languages(settings)
    for doc_id in doc_ids:
        lines = book.get_lines(doc_id)
        references.extend(extract_change_ids(doc_id, lines))
        report.block_languages.extend(check_block_languages(doc_id, lines, allowed))
        report.image_captions.extend(check_image_captions(doc_id, lines))
    report.generated_code = ConsistencyChecker(resolver, settings).check(references)
    return report
