"""
Keeps the stored plays of each board game in step with BoardGameGeek.
"""

import asyncio
import logging
from typing import List

from .database import BGGPlayCollector, PlayDataStore
from .error_handling import CollectorError
from .models import BoardGameStatus, SyncResult

logger = logging.getLogger(__name__)


class PlaySynchronizer:
    """
    Refreshes stored plays from the BGG plays endpoint.

    Collector requests are blocking and rate limited, so they run in a worker
    thread while the store calls stay on the event loop.
    """

    def __init__(self, store: PlayDataStore, collector: BGGPlayCollector):
        self.store = store
        self.collector = collector

    async def sync_game(self, game_id: int) -> SyncResult:
        """
        Synchronise the plays of one game.

        Skips the game when the stored count and the status already match the
        BGG total. When more plays are stored than BGG reports, the stored plays
        are removed before re-importing.

        Raises:
            CollectorError: BGG could not be read
            StorageUnavailable: MongoDB could not be reached
        """
        first_page = await asyncio.to_thread(self.collector.get_plays_page, game_id, 1)
        remote_total = first_page.total
        stored = await self.store.count_plays(game_id)
        status = await self.store.get_board_game_status(game_id)

        if stored == remote_total and status is not None and status.play_count == remote_total:
            logger.info(f"Plays for {game_id} are up to date ({stored})")
            return SyncResult(game_id=game_id, success=True, remote_total=remote_total,
                              stored_before=stored, skipped=True)

        deleted = False
        if stored > remote_total:
            logger.info(f"{stored} plays stored for {game_id} but BGG reports {remote_total}, re-importing")
            await self.store.delete_plays_for(game_id)
            deleted = True

        pages = self.collector.iter_plays(game_id, first_page)
        written = 0
        page_count = 0
        while True:
            page = await asyncio.to_thread(next, pages, None)
            if page is None:
                break
            page_count += 1
            if page.plays:
                await self.store.upsert_plays(page.plays)
                written += len(page.plays)

        await self.store.upsert_board_game_status(
            BoardGameStatus(object_id=game_id, play_count=remote_total, pages=page_count)
        )
        logger.info(f"Synchronised {written} plays for {game_id} from {page_count} page(s)")
        return SyncResult(game_id=game_id, success=True, remote_total=remote_total,
                          stored_before=stored, plays_written=written, deleted=deleted)

    async def sync_games(self, game_ids: List[int]) -> List[SyncResult]:
        """
        Synchronise the given games one after another.

        A game that BGG fails to serve is recorded as a failed result and the
        run continues; a storage failure ends the run.
        """
        results = []
        for i, game_id in enumerate(game_ids, 1):
            logger.info(f"Synchronising game {i}/{len(game_ids)}: {game_id}")
            try:
                results.append(await self.sync_game(game_id))
            except CollectorError as e:
                logger.error(f"Failed to synchronise {game_id}: {e}")
                results.append(SyncResult(game_id=game_id, success=False, error_message=str(e)))

            # Rate limiting
            if i < len(game_ids):
                await asyncio.sleep(self.collector.delay_seconds)
        return results

    async def sync_all(self) -> List[SyncResult]:
        """Synchronise every stored board game."""
        games = await self.store.list_board_games()
        if not games:
            logger.warning("No board games found in database")
            return []
        game_ids = []
        for game in games:
            if game.object_id is None:
                logger.warning(f"Skipping board game '{game.name or game.id}': no BGG id")
                continue
            game_ids.append(game.object_id)
        return await self.sync_games(game_ids)
