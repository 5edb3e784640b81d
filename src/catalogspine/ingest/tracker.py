"""Resume and dedup tracking.

The tracker owns a private copy of the checkpoint for the duration of one
page. A checkpoint with ``last_loaded_id`` set means an earlier run was
interrupted on this page: entries are skipped until that identity shows
up again, and only what follows it is new territory.

Example:
    >>> from catalogspine.core.checkpoint import Checkpoint
    >>> from catalogspine.ingest.tracker import ResumeTracker
    >>> tracker = ResumeTracker(
    ...     Checkpoint(catalog_id="c", last_loaded_id="b", loaded_ids={"a", "b"})
    ... )
    >>> [tracker.observe(i) for i in ("a", "b", "c")]
    [False, False, True]
    >>> tracker.finalize("https://example.com/opds?page=2").resume_uri
    'https://example.com/opds?page=2'
"""

from __future__ import annotations

import logging

from catalogspine.core.checkpoint import Checkpoint

logger = logging.getLogger(__name__)


class ResumeTracker:
    """Skip-until state, new-identity detection and checkpoint finalization."""

    def __init__(self, checkpoint: Checkpoint) -> None:
        self._checkpoint = checkpoint.copy()
        self._skip_until_id = checkpoint.last_loaded_id
        # A page counts as new unless a resume has to prove otherwise.
        self._found_new_ids = self._skip_until_id is None
        self._resume_failed = False

    @property
    def checkpoint(self) -> Checkpoint:
        return self._checkpoint

    @property
    def skipping(self) -> bool:
        return self._skip_until_id is not None

    @property
    def found_new_ids(self) -> bool:
        return self._found_new_ids

    @property
    def resume_failed(self) -> bool:
        return self._resume_failed

    def on_feed_start(self, base_url: str) -> None:
        """Point the checkpoint at the current page until the page completes."""
        self._checkpoint.resume_uri = base_url
        self._checkpoint.touch()

    def observe(self, entry_id: str) -> bool:
        """Record an entry identity.

        Returns:
            True when the entry lies past the resume point and should be
            delivered. The entry matching the resume point is not.
        """
        if self._skip_until_id is not None:
            if self._skip_until_id == entry_id:
                logger.debug("Resume point %s found", entry_id)
                self._skip_until_id = None
            return False

        checkpoint = self._checkpoint
        checkpoint.last_loaded_id = entry_id
        if entry_id not in checkpoint.loaded_ids:
            self._found_new_ids = True
        checkpoint.loaded_ids.add(entry_id)
        return True

    def finalize(self, next_url: str | None) -> Checkpoint:
        """Close the page and return the finished checkpoint.

        If the resume point never appeared, the next page is dropped and
        ``resume_uri`` ends up None.
        """
        if self._skip_until_id is not None:
            logger.warning(
                "Resume point %s not found on %s; not resuming",
                self._skip_until_id,
                self._checkpoint.resume_uri,
            )
            self._resume_failed = True
            next_url = None

        checkpoint = self._checkpoint
        checkpoint.resume_uri = next_url if self._found_new_ids else None
        checkpoint.last_loaded_id = None
        checkpoint.touch()
        return checkpoint
