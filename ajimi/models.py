import re
from enum import Enum

from pydantic import BaseModel, ConfigDict

from ajimi.exceptions import InputFormatError


StableChangeId = str
CommitRef = str
DocumentID = str


hunk_header_re = re.compile(
    r"^@@ -(?P<old_line>\d+)(?:,(?P<old_count>\d+))? "
    r"\+(?P<new_line>\d+)(?:,(?P<new_count>\d+))? @@ ?(?P<context>.*)$"
)


class CommitMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    hash: str
    title: str
    change_id: StableChangeId


class CommitPatch(BaseModel):
    hash: str
    title: str
    diff: str

    @classmethod
    def parse(cls, raw: str) -> "CommitPatch":
        """
        Split the backend's `<short-hash>: <title>` first line from the diff
        that follows it.

        """
        first_line, _, diff = raw.strip().partition("\n")
        hash_, sep, title = first_line.partition(": ")
        if not sep:
            raise InputFormatError(
                f"Expected ': ' right after the short commit hash: {first_line!r}"
            )
        return cls(hash=hash_, title=title, diff=diff)


class LineTag(str, Enum):
    added = "+"
    removed = "-"
    context = " "

    @classmethod
    def from_char(cls, c: str) -> "LineTag":
        try:
            return cls(c)
        except ValueError:
            raise InputFormatError(
                f"diff line type {c!r} is not supported"
            ) from None


class Hunk(BaseModel):
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    # Text git prints after the closing @@, usually the enclosing function.
    context: str
    # Raw lines of the hunk body, each still carrying its tag character.
    lines: list[str] = []

    @classmethod
    def parse_header(cls, line: str) -> "Hunk":
        match = hunk_header_re.match(line.rstrip("\n"))
        if match is None:
            raise InputFormatError(f"Invalid hunk header: {line!r}")
        return cls(
            old_start=int(match.group("old_line")),
            old_count=int(match.group("old_count") or 1),
            new_start=int(match.group("new_line")),
            new_count=int(match.group("new_count") or 1),
            context=match.group("context").rstrip(),
        )

    def first_content_text(self) -> str | None:
        """The first non-empty body line with its tag character removed."""
        for line in self.lines:
            text = line[1:].rstrip("\n")
            if text:
                return text
        return None


class FindingKind(str, Enum):
    order_goes_back = "order_goes_back"
    not_found_in_code = "not_found_in_code"
    not_in_book = "not_in_book"
    unknown_block_language = "unknown_block_language"
    blank_block_language = "blank_block_language"
    unclosed_block = "unclosed_block"
    missing_image_caption = "missing_image_caption"


class Finding(BaseModel):
    kind: FindingKind
    message: str
    doc_id: DocumentID | None = None
    # 1-indexed
    line_number: int | None = None
    change_id: StableChangeId | None = None

    def __str__(self) -> str:
        return self.message
