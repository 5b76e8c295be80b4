from ajimi.book.Book import Book
from ajimi.models import DocumentID


class InMemoryBook(Book):
    """
    This Book implementation stores the chapters in memory, and uses a dict to
    keep track of the lines of each document.

    It is intended for primary use in testing and debugging.

    """

    def __init__(self, documents: dict[DocumentID, list[str]]):
        """
        Arguments:
            documents: A dict mapping document IDs to lists of lines, in
                reading order.

        """
        self._documents = documents

    def list_doc_ids(self) -> list[DocumentID]:
        return list(self._documents.keys())

    def get_lines(self, doc_id: DocumentID) -> list[str]:
        return list(self._documents[doc_id])

    def set_lines(self, doc_id: DocumentID, lines: list[str]):
        self._documents[doc_id] = list(lines)
