"""
Regenerates the marker-delimited regions of a book chapter from the project's
history, leaving every line outside those regions untouched.

A region looks like this once generated:

    <!-- ajimi::code change_id I011d74fe -->
    <!-- ajimi::meta::title "Impl hexdump" -->

    ```rust,noplayground
    ...
    ```

    <!-- ajimi::end change_id I011d74fe -->

Authors only ever write the first line (or its `commit <hash>` form); the rest
is thrown away and rebuilt on every run.

"""

from pydantic import BaseModel

from ajimi import markers
from ajimi.commit_resolver import CommitResolver
from ajimi.exceptions import MalformedMetadataError, NotFoundError
from ajimi.formatter import DiffFormatter
from ajimi.logger import logger
from ajimi.models import CommitPatch


class _PendingRegion(BaseModel):
    """Strip-pass state while inside a region whose end is not yet seen."""

    end_marker: str
    body: list[str] = []


class RegionRewriter:
    """
    Rewrites the generated regions of a document given as a list of lines.

    The three passes are public so they can be run (and tested) on their own,
    but `rewrite` is the only correct way to combine them: markers must be
    canonical before stale bodies are stripped, and bodies must be stripped
    before new ones are inserted, which is what makes `rewrite` idempotent.

    """

    def __init__(
        self, resolver: CommitResolver, formatter: DiffFormatter | None = None
    ):
        self._resolver = resolver
        self._formatter = formatter or DiffFormatter(resolver)

    def rewrite(self, lines: list[str]) -> list[str]:
        lines = self.normalize_markers(lines)
        lines = self.strip_generated(lines)
        return self.insert_generated(lines)

    def normalize_markers(self, lines: list[str]) -> list[str]:
        """
        Replace `<!-- ajimi::code commit <ref> -->` markers with their
        canonical `change_id` form. Markers whose commit cannot be resolved are
        kept as they are, with a warning.

        """
        updated = []
        for line_number, line in enumerate(lines, start=1):
            commit_ref = markers.commit_ref_of(line)
            if commit_ref is None:
                updated.append(line)
                continue
            try:
                change_id = self._resolver.resolve_stable_id(commit_ref)
            except (NotFoundError, MalformedMetadataError) as e:
                logger.warning(f"Invalid commit at line {line_number}: {line} ({e})")
                updated.append(line)
                continue
            updated.append(markers.start_marker(change_id))
        return updated

    def strip_generated(self, lines: list[str]) -> list[str]:
        """
        Drop the bodies and end markers of all generated regions, keeping the
        start markers.

        Only a body closed by its exact end marker is dropped. A start marker
        that shows up before the previous region was closed puts the pending
        lines back, and so does reaching the end of the document.

        """
        updated: list[str] = []
        pending: _PendingRegion | None = None
        for line in lines:
            if markers.is_start_marker(line):
                if pending is not None:
                    # ajimi::code appeared again without ajimi::end.
                    updated.extend(pending.body)
                updated.append(line)
                pending = _PendingRegion(end_marker=markers.end_marker_for(line))
            elif pending is not None and line == pending.end_marker:
                pending = None
            elif pending is not None:
                pending.body.append(line)
            else:
                updated.append(line)
        if pending is not None:
            # Tail case for a region that was never terminated.
            updated.extend(pending.body)
        return updated

    def insert_generated(self, lines: list[str]) -> list[str]:
        """
        Render the patch of every start marker's change right after it.

        A change id that is not (or no longer) in the history leaves the start
        marker alone, without a body, so one stale marker does not block the
        rest of the book.

        Raises:
            InputFormatError: if a patch cannot be parsed or rendered.

        """
        updated = []
        for line in lines:
            updated.append(line)
            if not markers.is_start_marker(line):
                continue
            change_id = markers.change_id_of(line)
            if change_id is None:
                continue
            try:
                raw_patch = self._resolver.fetch_patch(change_id)
            except NotFoundError as e:
                logger.debug(f"Skipping {change_id}: {e}")
                continue
            patch = CommitPatch.parse(raw_patch)
            updated.append(markers.title_marker(patch.title))
            rendered = self._formatter.format(patch.diff, origin_commit=patch.hash)
            updated.extend(rendered.split("\n"))
            updated.append(markers.end_marker_for(line))
        return updated
