"""Page ingestion: pagination, resume tracking, interrupts and the driver."""

from catalogspine.ingest.driver import FeedIngestion, IngestionResult, IngestionState, RunConfig
from catalogspine.ingest.interrupt import InterruptPolicy
from catalogspine.ingest.pagination import PageWindow, PaginationController, page_window
from catalogspine.ingest.tracker import ResumeTracker

__all__ = [
    "FeedIngestion",
    "IngestionResult",
    "IngestionState",
    "InterruptPolicy",
    "PageWindow",
    "PaginationController",
    "ResumeTracker",
    "RunConfig",
    "page_window",
]
