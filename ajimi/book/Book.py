from typing import Protocol

from ajimi.models import DocumentID


class Book(Protocol):
    """
    A Book is the collection of markdown documents (chapters) the tool works
    on. Each document is identified by a DocumentID; for a filesystem-based
    book this is the path of the file as given on the command line.

    Documents are handled as lists of lines without their newline characters,
    such that `"\\n".join(book.get_lines(doc_id))` is the exact document text.

    """

    def list_doc_ids(self) -> list[DocumentID]:
        """
        List the document IDs of the book, in reading order.

        """
        ...

    def get_lines(self, doc_id: DocumentID) -> list[str]:
        """
        Get the lines of the specified document.

        """
        ...

    def set_lines(self, doc_id: DocumentID, lines: list[str]):
        """
        Replace the whole content of the specified document.

        """
        ...
