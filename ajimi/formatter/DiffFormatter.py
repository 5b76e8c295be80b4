"""
Turns the unified diff of a single commit into the markdown shown in the book.

Each changed file becomes one fenced code block. Added lines are wrapped in
`**`, removed lines in `~~`, and unchanged context is printed as is. Skipped
stretches of the file between hunks are replaced by an elision marker.

"""

import re
from typing import Iterable

from ajimi.commit_resolver import CommitResolver
from ajimi.config import Settings
from ajimi.exceptions import InputFormatError
from ajimi.formatter.EnclosingContext import LineFetcher, enclosing_context
from ajimi.formatter.languages import ANONYMOUS_LANGUAGE, fence_language
from ajimi.models import CommitRef, Hunk, LineTag

FILE_HEADER = "diff --git"
HUNK_HEADER = "@@"

_WRAPPERS = {
    LineTag.added: "**",
    LineTag.removed: "~~",
    LineTag.context: "",
}

# Lines that open a top-level definition. Once one of them has been printed,
# there is no need to re-emit it as the enclosing context of a later hunk.
top_level_definition_re = re.compile(
    r"^(pub(\([^)]*\))? )?((async|const|unsafe|extern \S+) )*"
    r"(fn|impl|struct|enum|trait|mod|def|class) "
)


def _split_files(unified_diff: str) -> list[str]:
    """Split a diff into chunks that each begin at a `diff --git` line."""
    lines = unified_diff.split("\n")
    if lines[-1] == "":
        # Final newline of the diff, not an empty diff line.
        lines.pop()
    segments: list[list[str]] = [[]]
    for line in lines:
        if line.startswith(FILE_HEADER):
            segments.append([])
        segments[-1].append(line)
    return ["\n".join(segment) for segment in segments]


def _filename(header: str) -> str:
    # diff --git a/<path> b/<path>
    parts = header.split(" ")
    if len(parts) < 3 or not parts[2].startswith("a/"):
        raise InputFormatError(f"Invalid file header: {header!r}")
    return parts[2].removeprefix("a/")


def _hunks(lines: Iterable[str]) -> list[Hunk]:
    """
    Group the lines of one file's diff into hunks. Everything before the first
    hunk header (`index`, `new file mode`, `---`, `+++`, ...) is metadata and
    dropped.

    """
    hunks: list[Hunk] = []
    for line in lines:
        if line.startswith(HUNK_HEADER):
            hunks.append(Hunk.parse_header(line))
        elif hunks:
            hunks[-1].lines.append(line)
    return hunks


class DiffFormatter:
    """
    Renders unified diffs as annotated markdown code blocks.

    The formatter keeps no state between calls to `format`. The set of
    enclosing-context lines already printed is tracked per changed file.

    """

    def __init__(self, resolver: CommitResolver, settings: Settings | None = None):
        """
        Arguments:
            resolver: Used to look up the line right before a hunk, to decide
                whether an elision marker is needed after its context line.
            settings: Overrides for the markers and annotations. Defaults to
                `Settings()`.

        """
        self._resolver = resolver
        self._settings = settings or Settings()

    @property
    def elision(self) -> str:
        return self._settings.elision_marker

    def format(self, unified_diff: str, origin_commit: CommitRef | None = None) -> str:
        """
        Render `unified_diff` as markdown.

        Arguments:
            unified_diff: The diff part of a commit patch, i.e. one or more
                `diff --git` sections.
            origin_commit: The commit the diff belongs to. When given, the
                file contents at that commit are used to decide on elision
                markers after enclosing-context lines.

        Returns:
            str: The rendered markdown. Every file's block starts with a blank
                line and ends with a newline; an empty diff renders as "".

        Raises:
            InputFormatError: on a section that does not start with a file
                header, an unknown file type, or an unsupported line type.

        """
        output = ""
        for i, segment in enumerate(_split_files(unified_diff)):
            if not segment.strip():
                continue
            if segment.startswith(FILE_HEADER):
                lines = segment.split("\n")
                filename = _filename(lines[0])
                output += self._format_file(
                    fence_language(filename), filename, lines[1:], origin_commit
                )
            elif i == 0 and segment.lstrip("\n").startswith(HUNK_HEADER):
                # A bare hunk list without any file header.
                output += self._format_file(
                    ANONYMOUS_LANGUAGE, None, segment.split("\n"), None
                )
            else:
                raise InputFormatError(f"Invalid part found: {segment!r}")
        return output

    def _line_fetcher(
        self, filename: str | None, origin_commit: CommitRef | None
    ) -> LineFetcher | None:
        if filename is None or origin_commit is None:
            return None
        return lambda line_number: self._resolver.fetch_line(
            origin_commit, filename, line_number
        )

    def _format_file(
        self,
        lang: str,
        filename: str | None,
        lines: list[str],
        origin_commit: CommitRef | None,
    ) -> str:
        output = f"\n```{lang}\n"
        if filename is not None:
            output += self._settings.filename_annotation.format(filename=filename)
            output += "\n"

        fetch_line = self._line_fetcher(filename, origin_commit)
        context_emitted: set[str] = set()
        num_diff_lines = 0
        for hunk in _hunks(lines):
            if num_diff_lines > 0 and hunk.old_start != 1:
                output += f"\n{self.elision}\n\n"
            for context_line in enclosing_context(
                hunk,
                fetch_line,
                context_emitted,
                self._settings.context_indent + self.elision,
            ):
                output += context_line + "\n"
            for line in hunk.lines:
                text = line[1:]
                if not text:
                    output += "\n"
                    continue
                tag = LineTag.from_char(line[0])
                if top_level_definition_re.match(text):
                    context_emitted.add(text.rstrip())
                wrapper = _WRAPPERS[tag]
                output += f"{wrapper}{text}{wrapper}\n"
                num_diff_lines += 1
        output += "```\n"
        return output
