from .EnclosingContext import enclosing_context, opens_block
from ..exceptions import OutOfRangeError
from ..models import Hunk

ELISION = "    // << 中略 >>"


def _hunk(header: str, *lines: str) -> Hunk:
    hunk = Hunk.parse_header(header)
    hunk.lines.extend(lines)
    return hunk


def test_only_brace_terminated_context_with_indented_body_counts():
    assert opens_block(_hunk("@@ -10,3 +10,4 @@ fn main() {", "     let a = 1;"))
    assert not opens_block(_hunk("@@ -10,3 +10,4 @@ fn main()", "     let a = 1;"))
    assert not opens_block(_hunk("@@ -10,3 +10,4 @@", "     let a = 1;"))
    assert not opens_block(_hunk("@@ -10,3 +10,4 @@ impl A {", " fn a() {}"))
    # Empty lines are skipped when looking for the first substantive line.
    assert opens_block(_hunk("@@ -10,3 +10,4 @@ impl A {", " ", "+    fn a() {}"))


def test_context_is_emitted_once_with_elision():
    emitted: set[str] = set()
    hunk = _hunk("@@ -10,3 +10,4 @@ fn main() {", "     let a = 1;")
    fetched = []

    def fetch_line(n):
        fetched.append(n)
        return "    let z = 0;"

    assert enclosing_context(hunk, fetch_line, emitted, ELISION) == [
        "fn main() {",
        ELISION,
    ]
    assert fetched == [9]
    assert enclosing_context(hunk, fetch_line, emitted, ELISION) == []


def test_no_elision_when_nothing_was_skipped():
    hunk = _hunk("@@ -2,3 +2,4 @@ fn main() {", "     let a = 1;")
    assert enclosing_context(hunk, lambda n: "fn main() {  ", set(), ELISION) == [
        "fn main() {"
    ]


def test_failed_lookup_counts_as_empty_line():
    def fetch_line(n):
        raise OutOfRangeError("line_number < 1")

    hunk = _hunk("@@ -1,3 +1,4 @@ fn main() {", "     let a = 1;")
    assert enclosing_context(hunk, fetch_line, set(), ELISION) == [
        "fn main() {",
        ELISION,
    ]
    assert enclosing_context(hunk, None, set(), ELISION) == ["fn main() {", ELISION]


def test_already_emitted_definition_is_not_repeated():
    hunk = _hunk("@@ -10,3 +10,4 @@ fn main() {", "     let a = 1;")
    assert enclosing_context(hunk, None, {"fn main() {"}, ELISION) == []
