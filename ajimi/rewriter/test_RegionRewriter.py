import logging

import pytest

from .RegionRewriter import RegionRewriter
from ..commit_resolver.InMemoryCommitResolver import (
    InMemoryCommit,
    InMemoryCommitResolver,
)
from ..exceptions import InputFormatError


START_X = "<!-- ajimi::code change_id X -->"
END_X = "<!-- ajimi::end change_id X -->"


@pytest.fixture
def resolver():
    return InMemoryCommitResolver(
        [
            InMemoryCommit(
                hash="85fd15d0d6c8f897d2b6ee4ee06aeb2342924b95",
                message="Impl hexdump\n\nChange-Id: I011d74fe\n",
                diff=(
                    "diff --git a/src/main.rs b/src/main.rs\n"
                    "@@ -1,3 +1,4 @@\n"
                    " fn main() {\n"
                    "+    hexdump();\n"
                    " }\n"
                ),
            ),
            InMemoryCommit(
                hash="abc123ffff",
                message="Title\n\nChange-Id: X\n",
                diff="@@ -1,1 +1,1 @@\n-old\n+new\n",
            ),
        ]
    )


def test_replace_commit_marker_with_change_id(resolver):
    rewriter = RegionRewriter(resolver)

    # If there is a commit tag, replace it with the change id.
    assert rewriter.normalize_markers(
        ["<!-- ajimi::code commit 85fd15d0d6c8f897d2b6ee4ee06aeb2342924b95 -->"]
    ) == ["<!-- ajimi::code change_id I011d74fe -->"]

    # If there is an invalid commit tag, keep the line as is.
    assert rewriter.normalize_markers(
        ["<!-- ajimi::code commit broken_commit_id -->"]
    ) == ["<!-- ajimi::code commit broken_commit_id -->"]

    # If there is a change id tag, do not modify it.
    assert rewriter.normalize_markers(["<!-- ajimi::code change_id I011d74fe -->"]) == [
        "<!-- ajimi::code change_id I011d74fe -->"
    ]


def test_strip_generated_drops_terminated_bodies():
    rewriter = RegionRewriter(InMemoryCommitResolver())
    assert rewriter.strip_generated(
        ["before", START_X, "old body", "more", END_X, "after"]
    ) == ["before", START_X, "after"]


def test_strip_generated_recovers_orphaned_bodies():
    rewriter = RegionRewriter(InMemoryCommitResolver())
    start_y = "<!-- ajimi::code change_id Y -->"
    end_y = "<!-- ajimi::end change_id Y -->"
    assert rewriter.strip_generated(
        [START_X, "author text", start_y, "generated", end_y, "after"]
    ) == [START_X, "author text", start_y, "after"]
    # Unterminated region at the end of the document.
    assert rewriter.strip_generated([START_X, "tail", "text"]) == [
        START_X,
        "tail",
        "text",
    ]


def test_end_to_end_rewrite(resolver):
    rewriter = RegionRewriter(resolver)
    output = rewriter.rewrite([START_X, "old body", END_X])
    assert output == [
        START_X,
        '<!-- ajimi::meta::title "Title" -->',
        "",
        "```txt",
        "~~old~~",
        "**new**",
        "```",
        "",
        END_X,
    ]
    assert "old body" not in "\n".join(output)


def test_rewrite_normalizes_then_inserts(resolver):
    rewriter = RegionRewriter(resolver)
    output = rewriter.rewrite(
        [
            "# Chapter",
            "<!-- ajimi::code commit 85fd15d -->",
            "Some prose.",
        ]
    )
    assert output == [
        "# Chapter",
        "<!-- ajimi::code change_id I011d74fe -->",
        '<!-- ajimi::meta::title "Impl hexdump" -->',
        "",
        "```rust,noplayground",
        "(注:src/main.rs)",
        "fn main() {",
        "**    hexdump();**",
        "}",
        "```",
        "",
        "<!-- ajimi::end change_id I011d74fe -->",
        "Some prose.",
    ]


def test_rewrite_is_idempotent_and_preserves_prose(resolver):
    rewriter = RegionRewriter(resolver)
    start_hexdump = "<!-- ajimi::code change_id I011d74fe -->"
    end_hexdump = "<!-- ajimi::end change_id I011d74fe -->"
    broken = "<!-- ajimi::code commit broken_commit_id -->"
    document = [
        "# Chapter",
        "",
        start_hexdump,
        "stale",
        end_hexdump,
        "Between the regions.",
        START_X,
        broken,
        "Trailing prose.",
        "",
    ]
    once = rewriter.rewrite(document)
    assert rewriter.rewrite(once) == once

    first_start = once.index(start_hexdump)
    first_end = once.index(end_hexdump)
    second_start = once.index(START_X)
    second_end = once.index(END_X)
    assert once[:first_start] == ["# Chapter", ""]
    assert once[first_end + 1 : second_start] == ["Between the regions."]
    # The X region was never closed, so the lines after it are author text.
    assert once[second_end + 1 :] == [broken, "Trailing prose.", ""]
    assert "stale" not in once[first_start:first_end]
    assert once[second_start + 1 : second_end] == [
        '<!-- ajimi::meta::title "Title" -->',
        "",
        "```txt",
        "~~old~~",
        "**new**",
        "```",
        "",
    ]


def test_unknown_change_id_keeps_marker_without_body(resolver):
    rewriter = RegionRewriter(resolver)
    start = "<!-- ajimi::code change_id Igone -->"
    assert rewriter.rewrite(
        ["intro", start, "<!-- ajimi::end change_id Igone -->", "outro"]
    ) == ["intro", start, "outro"]


def test_patch_without_title_separator_is_fatal():
    class BrokenResolver(InMemoryCommitResolver):
        def fetch_patch(self, change_id):
            return "no separator here\n@@ -1 +1 @@\n-a\n+b\n"

    with pytest.raises(InputFormatError):
        RegionRewriter(BrokenResolver()).rewrite([START_X])


def test_unresolvable_commit_marker_is_logged_with_line_number(resolver, caplog):
    caplog.set_level(logging.WARNING, logger="ajimi")
    rewriter = RegionRewriter(resolver)
    rewriter.normalize_markers(
        ["# Chapter", "<!-- ajimi::code commit broken_commit_id -->"]
    )
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "line 2" in warnings[0].getMessage()
    assert "broken_commit_id" in warnings[0].getMessage()


def test_commit_without_change_id_is_logged_and_kept(resolver, caplog):
    caplog.set_level(logging.WARNING, logger="ajimi")
    resolver.commit(InMemoryCommit(hash="0123456789", message="No trailer here"))
    rewriter = RegionRewriter(resolver)
    marker = "<!-- ajimi::code commit 0123456789 -->"
    assert rewriter.normalize_markers([marker]) == [marker]
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "line 1" in warnings[0].getMessage()
    assert "Change-Id" in warnings[0].getMessage()
