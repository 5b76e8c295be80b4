import pytest

from .InMemoryCommitResolver import InMemoryCommit, InMemoryCommitResolver
from ..exceptions import MalformedMetadataError, NotFoundError, OutOfRangeError


@pytest.fixture
def resolver():
    return InMemoryCommitResolver(
        [
            InMemoryCommit(
                hash="85fd15d0d6c8f897d2b6ee4ee06aeb2342924b95",
                message="Impl hexdump\n\nChange-Id: I011d74fe\n",
                diff="diff --git a/src/main.rs b/src/main.rs\n",
                files={"src/main.rs": ["fn main() {", "}"]},
            ),
            InMemoryCommit(
                hash="9f9107d0e653eb0f185e6be012a3a9b92055c5e1",
                message="Cache glyphs\n\nChange-Id: Ifd40ea5f\n",
            ),
            InMemoryCommit(hash="0123456789", message="No trailer here"),
        ]
    )


def test_resolve_stable_id_by_full_and_short_hash(resolver):
    assert (
        resolver.resolve_stable_id("85fd15d0d6c8f897d2b6ee4ee06aeb2342924b95")
        == "I011d74fe"
    )
    assert resolver.resolve_stable_id("9f9107d") == "Ifd40ea5f"


def test_resolve_stable_id_failures(resolver):
    with pytest.raises(NotFoundError):
        resolver.resolve_stable_id("broken_commit_id")
    with pytest.raises(MalformedMetadataError):
        resolver.resolve_stable_id("0123456789")


def test_fetch_patch_starts_with_hash_and_title(resolver):
    patch = resolver.fetch_patch("I011d74fe")
    assert patch.split("\n")[0] == "85fd15d: Impl hexdump"
    assert "diff --git a/src/main.rs" in patch
    with pytest.raises(NotFoundError):
        resolver.fetch_patch("Inope")


def test_fetch_patch_prefers_most_recent_match():
    resolver = InMemoryCommitResolver(
        [
            InMemoryCommit(hash="aaaaaaa1", message="Old\n\nChange-Id: Idup"),
            InMemoryCommit(hash="bbbbbbb2", message="New\n\nChange-Id: Idup"),
        ]
    )
    assert resolver.fetch_patch("Idup").startswith("bbbbbbb: New")


def test_fetch_line_bounds(resolver):
    assert resolver.fetch_line("85fd15d", "src/main.rs", 1) == "fn main() {"
    with pytest.raises(OutOfRangeError):
        resolver.fetch_line("85fd15d", "src/main.rs", 0)
    with pytest.raises(OutOfRangeError):
        resolver.fetch_line("85fd15d", "src/main.rs", 3)
    with pytest.raises(NotFoundError):
        resolver.fetch_line("85fd15d", "src/lib.rs", 1)


def test_enumerate_history_is_newest_first_and_skips_untracked(resolver):
    history = resolver.enumerate_history()
    assert [c.change_id for c in history] == ["Ifd40ea5f", "I011d74fe"]
    assert history[1].title == "Impl hexdump"


def test_committed_change_is_newest(resolver):
    resolver.commit(
        InMemoryCommit(
            hash="c0ffee0000", message="Add colors\n\nChange-Id: Ic0ffee\n"
        )
    )
    assert resolver.enumerate_history()[0].change_id == "Ic0ffee"
    assert resolver.fetch_patch("Ic0ffee").startswith("c0ffee0: Add colors")
