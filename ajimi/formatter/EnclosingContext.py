"""
When a hunk starts inside a block (a function body, an impl, a struct), the
reader loses track of where the lines belong. Git already names the enclosing
line in the hunk header (`@@ -10,6 +10,7 @@ fn main() {`), so we print that
line once above the hunk, followed by an elision marker when lines between it
and the hunk were skipped.

This is a guess based on two signals only:

* the header's context line ends with `{`, and
* the first non-empty line of the hunk is indented.

Anything else (a header without context, a context that does not open a
block, a hunk that starts at column zero) yields nothing.

"""

from typing import Callable

from ajimi.exceptions import NotFoundError, OutOfRangeError
from ajimi.models import Hunk

# Fetches a line of the changed file, 1-indexed, as of the rendered commit.
LineFetcher = Callable[[int], str]


def opens_block(hunk: Hunk) -> bool:
    if not hunk.context.endswith("{"):
        return False
    first = hunk.first_content_text()
    return first is not None and first[:1] in (" ", "\t")


def enclosing_context(
    hunk: Hunk,
    fetch_line: LineFetcher | None,
    emitted: set[str],
    elision: str,
) -> list[str]:
    """
    Return the lines to print above `hunk` to show which block it lives in.

    Arguments:
        hunk: The hunk about to be rendered.
        fetch_line: Looks up lines of the file after the change. None when the
            originating commit is unknown, in which case the preceding line is
            treated as empty.
        emitted: Context lines already printed in this document pass. Updated
            in place.
        elision: The (already indented) marker to print when lines between the
            context line and the hunk were skipped.

    Returns:
        list[str]: Zero, one or two lines, without newlines.

    """
    if not opens_block(hunk):
        return []
    if hunk.context in emitted:
        return []
    emitted.add(hunk.context)

    line_before_hunk = ""
    if fetch_line is not None:
        try:
            line_before_hunk = fetch_line(hunk.new_start - 1)
        except (OutOfRangeError, NotFoundError):
            line_before_hunk = ""

    lines = [hunk.context]
    if hunk.context != line_before_hunk.rstrip():
        lines.append(elision)
    return lines
