"""
Lint passes over the markdown of the book that do not need the history: fenced
code block languages, and captions of images.

"""

import re

from ajimi.config import Settings
from ajimi.formatter.languages import ANONYMOUS_LANGUAGE, FENCE_LANGUAGES
from ajimi.models import DocumentID, Finding, FindingKind

FENCE = "```"

image_re = re.compile(r"!\[(.*?)\]\((.*?)\)")


def allowed_block_languages(settings: Settings | None = None) -> set[str]:
    """Every fence tag the diff formatter can emit, plus the configured extras."""
    settings = settings or Settings()
    return (
        set(FENCE_LANGUAGES.values())
        | {ANONYMOUS_LANGUAGE}
        | set(settings.extra_block_languages)
    )


def check_block_languages(
    doc_id: DocumentID, lines: list[str], allowed: set[str]
) -> list[Finding]:
    """
    Check the tag of every fenced code block opened in a document.

    A blank tag is accepted on the first block of the document only, since
    that one is typically the chapter's front matter.

    """
    findings = []
    open_block_line: int | None = None
    is_first_block = True
    for line_number, line in enumerate(lines, start=1):
        if not line.startswith(FENCE):
            continue
        if open_block_line is not None:
            open_block_line = None
            continue
        open_block_line = line_number
        lang = line.removeprefix(FENCE)
        if lang == "" and not is_first_block:
            findings.append(
                Finding(
                    kind=FindingKind.blank_block_language,
                    message=f"{doc_id}:{line_number}: {line}",
                    doc_id=doc_id,
                    line_number=line_number,
                )
            )
        elif lang != "" and lang not in allowed:
            findings.append(
                Finding(
                    kind=FindingKind.unknown_block_language,
                    message=f"Unknown block lang: {doc_id}:{line_number}: {line}",
                    doc_id=doc_id,
                    line_number=line_number,
                )
            )
        is_first_block = False

    if open_block_line is not None:
        findings.append(
            Finding(
                kind=FindingKind.unclosed_block,
                message=(
                    f"Unclosed code block in file: {doc_id}, "
                    f"started at line: {open_block_line}"
                ),
                doc_id=doc_id,
                line_number=open_block_line,
            )
        )
    return findings


def check_image_captions(doc_id: DocumentID, lines: list[str]) -> list[Finding]:
    """
    Every image must be preceded by an HTML comment line (its caption/source
    note), and must have alt text.

    """
    findings = []
    for i, line in enumerate(lines):
        if not image_re.search(line):
            continue
        caption = lines[i - 1] if i > 0 and lines[i - 1].startswith("<!-- ") else None
        if caption is None or "![]" in line:
            findings.append(
                Finding(
                    kind=FindingKind.missing_image_caption,
                    message=f"{doc_id}:{i + 1}: {caption!r}: {line}",
                    doc_id=doc_id,
                    line_number=i + 1,
                )
            )
    return findings
