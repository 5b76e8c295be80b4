from .Book import Book
from .FileSystemBook import FileSystemBook
from .InMemoryBook import InMemoryBook


__all__ = ["Book", "FileSystemBook", "InMemoryBook"]
