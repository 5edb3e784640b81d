"""Tests for catalogspine.ingest.tracker."""

from __future__ import annotations

from catalogspine.core.checkpoint import Checkpoint
from catalogspine.ingest.tracker import ResumeTracker

NEXT = "https://example.com/opds?page=2"


class TestFreshRun:
    """No resume pending."""

    def test_every_entry_is_new_territory(self) -> None:
        """Without a resume point nothing is skipped."""
        tracker = ResumeTracker(Checkpoint(catalog_id="c"))
        assert [tracker.observe(i) for i in ("a", "b")] == [True, True]
        assert tracker.checkpoint.loaded_ids == {"a", "b"}
        assert tracker.checkpoint.last_loaded_id == "b"

    def test_page_of_known_ids_still_paginates(self) -> None:
        """A fresh run reports its next page even if every id was seen."""
        tracker = ResumeTracker(Checkpoint(catalog_id="c", loaded_ids={"a"}))
        tracker.observe("a")
        assert tracker.finalize(NEXT).resume_uri == NEXT

    def test_finalize_clears_cursor(self) -> None:
        """last_loaded_id does not survive the page."""
        tracker = ResumeTracker(Checkpoint(catalog_id="c"))
        tracker.observe("a")
        checkpoint = tracker.finalize(None)
        assert checkpoint.last_loaded_id is None
        assert checkpoint.resume_uri is None


class TestResume:
    """Resume pending."""

    def test_skips_through_resume_point(self) -> None:
        """Entries up to and including the resume point are skipped."""
        tracker = ResumeTracker(
            Checkpoint(catalog_id="c", last_loaded_id="b", loaded_ids={"a", "b"})
        )
        assert [tracker.observe(i) for i in ("a", "b", "c", "d")] == [False, False, True, True]
        assert tracker.checkpoint.loaded_ids == {"a", "b", "c", "d"}

    def test_new_id_after_resume_point(self) -> None:
        """A new identity after the resume point keeps pagination going."""
        tracker = ResumeTracker(Checkpoint(catalog_id="c", last_loaded_id="b", loaded_ids={"a", "b"}))
        for i in ("a", "b", "c"):
            tracker.observe(i)
        assert tracker.found_new_ids
        assert tracker.finalize(NEXT).resume_uri == NEXT

    def test_only_known_ids_after_resume_point(self) -> None:
        """Nothing new after the resume point: no next page."""
        tracker = ResumeTracker(
            Checkpoint(catalog_id="c", last_loaded_id="b", loaded_ids={"a", "b", "c"})
        )
        for i in ("a", "b", "c"):
            tracker.observe(i)
        assert not tracker.found_new_ids
        assert tracker.finalize(NEXT).resume_uri is None

    def test_unknown_ids_before_resume_point_do_not_count(self) -> None:
        """Skipped entries never flag new identities."""
        tracker = ResumeTracker(Checkpoint(catalog_id="c", last_loaded_id="b", loaded_ids={"b"}))
        for i in ("x", "b"):
            tracker.observe(i)
        assert not tracker.found_new_ids
        assert "x" not in tracker.checkpoint.loaded_ids

    def test_resume_failure_drops_next_page(self) -> None:
        """If the resume point never shows up, pagination stops."""
        tracker = ResumeTracker(
            Checkpoint(catalog_id="c", last_loaded_id="gone", loaded_ids={"gone"})
        )
        for i in ("a", "b"):
            assert tracker.observe(i) is False
        checkpoint = tracker.finalize(NEXT)
        assert checkpoint.resume_uri is None
        assert checkpoint.last_loaded_id is None
        assert tracker.resume_failed

    def test_caller_checkpoint_untouched(self) -> None:
        """The tracker works on a copy."""
        original = Checkpoint(catalog_id="c", loaded_ids={"a"})
        tracker = ResumeTracker(original)
        tracker.on_feed_start("https://example.com/opds")
        tracker.observe("z")
        tracker.finalize(NEXT)
        assert original.loaded_ids == {"a"}
        assert original.resume_uri is None

    def test_on_feed_start_points_at_page(self) -> None:
        """Until the page completes the checkpoint resumes this page."""
        tracker = ResumeTracker(Checkpoint(catalog_id="c"))
        tracker.on_feed_start("https://example.com/opds")
        assert tracker.checkpoint.resume_uri == "https://example.com/opds"
