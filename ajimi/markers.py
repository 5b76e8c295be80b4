"""
Marker comments that delimit generated regions inside a book chapter.

    <!-- ajimi::code commit <ref> -->            loose start marker
    <!-- ajimi::code change_id <change-id> -->   canonical start marker
    <!-- ajimi::meta::title "<title>" -->        metadata line
    <!-- ajimi::end change_id <change-id> -->    end marker

Markers are compared as whole lines. The end marker of a region is always
derived from its start marker line, never parsed independently.

"""

from ajimi.models import CommitRef, StableChangeId

CODE_TOKEN = "ajimi::code"
END_TOKEN = "ajimi::end"
CHANGE_ID_KEY = "change_id"
COMMIT_KEY = "commit"


def _is_code_marker(line: str) -> bool:
    return line.startswith("<!--") and CODE_TOKEN in line


def _value_after(line: str, key: str) -> str | None:
    tokens = line.split(" ")
    for i, token in enumerate(tokens[:-1]):
        if token == key:
            return tokens[i + 1]
    return None


def commit_ref_of(line: str) -> CommitRef | None:
    """Return the commit reference of a loose start marker, if `line` is one."""
    if not _is_code_marker(line):
        return None
    return _value_after(line, COMMIT_KEY)


def change_id_of(line: str) -> StableChangeId | None:
    """Return the change id of a canonical start marker, if `line` is one."""
    if not _is_code_marker(line):
        return None
    return _value_after(line, CHANGE_ID_KEY)


def is_start_marker(line: str) -> bool:
    return _is_code_marker(line) and f"{CODE_TOKEN} {CHANGE_ID_KEY}" in line


def start_marker(change_id: StableChangeId) -> str:
    return f"<!-- {CODE_TOKEN} {CHANGE_ID_KEY} {change_id} -->"


def end_marker_for(start_line: str) -> str:
    return start_line.replace(CODE_TOKEN, END_TOKEN)


def title_marker(title: str) -> str:
    return f'<!-- ajimi::meta::title "{title}" -->'
