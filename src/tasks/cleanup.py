"""
Scheduled cleanup task.

Permanently deletes bookmarks that were soft-removed more than
REMOVED_RETENTION_DAYS ago. Designed to run as a cron job (e.g., daily).

Usage:
    python -m tasks.cleanup
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from db.session import async_session_factory
from models.bookmark import Bookmark

logger = logging.getLogger(__name__)


@dataclass
class CleanupStats:
    """Statistics from a cleanup run."""

    removed_purged: int = 0
    cutoff: int = 0

    def to_dict(self) -> dict[str, int]:
        """Convert to simple dict for logging/return."""
        return {
            "removed_purged": self.removed_purged,
            "cutoff": self.cutoff,
        }


async def purge_removed_bookmarks(
    db: AsyncSession,
    now: datetime | None = None,
    retention_days: int | None = None,
) -> CleanupStats:
    """
    Permanently delete bookmarks removed longer than retention_days ago.

    Bookmarks removed exactly at the cutoff are kept (strictly older only).

    Args:
        db: Database session.
        now: Current time for cutoff calculation. Defaults to datetime.now(UTC).
        retention_days: Days a removed bookmark is kept. Defaults to the
            REMOVED_RETENTION_DAYS setting.

    Returns:
        CleanupStats with the number of purged bookmarks.
    """
    if now is None:
        now = datetime.now(UTC)
    if retention_days is None:
        retention_days = get_settings().removed_retention_days

    cutoff = int((now - timedelta(days=retention_days)).timestamp())
    result = await db.execute(
        delete(Bookmark).where(
            Bookmark.removed_at > 0,
            Bookmark.removed_at < cutoff,
        ),
    )
    stats = CleanupStats(removed_purged=result.rowcount, cutoff=cutoff)

    if stats.removed_purged > 0:
        logger.info(
            "Permanently deleted %d bookmarks (removed > %d days)",
            stats.removed_purged,
            retention_days,
        )

    await db.commit()
    return stats


async def run_cleanup(
    db: AsyncSession | None = None,
    now: datetime | None = None,
) -> CleanupStats:
    """
    Run the cleanup task.

    Args:
        db: Database session. If None, creates one from async_session_factory.
        now: Current time for cutoff calculation. Defaults to datetime.now(UTC).

    Returns:
        CleanupStats from the purge.
    """
    logger.info("Starting cleanup task")

    if db is not None:
        stats = await purge_removed_bookmarks(db, now=now)
    else:
        async with async_session_factory() as session:
            stats = await purge_removed_bookmarks(session, now=now)

    logger.info("Cleanup complete: %s", stats.to_dict())
    return stats


def main() -> None:
    """Entry point for running cleanup as a script."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_cleanup())


if __name__ == "__main__":
    main()
