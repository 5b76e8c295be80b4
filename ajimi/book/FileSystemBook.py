import pathlib

from ajimi.book.Book import Book
from ajimi.models import DocumentID


class FileSystemBook(Book):
    """
    A Book whose chapters are files on disk. Files are read and written whole;
    errors from the filesystem (missing file, permissions) propagate.

    """

    def __init__(self, paths: list[pathlib.Path | str]):
        self._paths = [str(path) for path in paths]

    def list_doc_ids(self) -> list[DocumentID]:
        return list(self._paths)

    def get_lines(self, doc_id: DocumentID) -> list[str]:
        if doc_id not in self._paths:
            raise FileNotFoundError(f"Document {doc_id} is not part of this book.")
        with open(doc_id, encoding="utf-8", newline="") as f:
            return f.read().split("\n")

    def set_lines(self, doc_id: DocumentID, lines: list[str]):
        if doc_id not in self._paths:
            raise FileNotFoundError(f"Document {doc_id} is not part of this book.")
        with open(doc_id, "w", encoding="utf-8", newline="") as f:
            f.write("\n".join(lines))
