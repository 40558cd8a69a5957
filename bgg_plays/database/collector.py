import logging
import math
import time
import xml.etree.ElementTree as ET
from typing import Iterator, Optional

import requests

from ..config import BGG_API_URL, MAX_QUEUED_RETRIES, PLAYS_PER_PAGE, REQUEST_DELAY, REQUEST_TIMEOUT
from ..error_handling import CollectorError
from ..models import Play, Player, PlaysPage

logger = logging.getLogger(__name__)


def _int_attr(element, name, default=None):
    value = element.get(name)
    if value in (None, ""):
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _float_attr(element, name):
    value = element.get(name)
    try:
        return float(value) if value else None
    except ValueError:
        return None


class BGGPlayCollector:
    def __init__(self, base_url=BGG_API_URL, delay_seconds=REQUEST_DELAY,
                 max_retries=MAX_QUEUED_RETRIES, session: Optional[requests.Session] = None):
        self.base_url = base_url
        self.delay_seconds = delay_seconds
        self.max_retries = max_retries
        self.session = session or requests.Session()

    def get_plays_page(self, game_id: int, page: int = 1) -> PlaysPage:
        """Fetch one page of logged plays for a game from the BGG plays endpoint."""
        url = f"{self.base_url}/plays"
        params = {
            'id': game_id,
            'type': 'thing',
            'page': page
        }

        for attempt in range(self.max_retries + 1):
            try:
                response = self.session.get(url, params=params, timeout=REQUEST_TIMEOUT)
                response.raise_for_status()
            except requests.RequestException as e:
                raise CollectorError(f"Error fetching plays page {page} for {game_id}: {e}") from e

            # BGG answers 202 while it queues the request
            if response.status_code != 202:
                return self.parse_plays(response.content, game_id, page)

            if attempt < self.max_retries:
                logger.info(f"BGG queued plays page {page} for {game_id}, retrying in {self.delay_seconds}s")
                time.sleep(self.delay_seconds)

        raise CollectorError(f"BGG kept queueing plays page {page} for {game_id} after {self.max_retries} retries")

    def parse_plays(self, content, game_id: int, page: int) -> PlaysPage:
        """Parse a ``<plays>`` XML document into a PlaysPage."""
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise CollectorError(f"Malformed plays XML for {game_id} page {page}: {e}") from e

        if root.tag != 'plays':
            raise CollectorError(f"Unexpected root element <{root.tag}> for {game_id} page {page}")

        plays = []
        for element in root.findall('play'):
            play_id = _int_attr(element, 'id')
            if play_id is None:
                logger.warning(f"Skipping play without id for {game_id}")
                continue

            item = element.find('item')
            object_id = _int_attr(item, 'objectid', game_id) if item is not None else game_id

            comments = element.find('comments')
            players = [
                Player(
                    name=p.get('name') or None,
                    username=p.get('username') or None,
                    user_id=_int_attr(p, 'userid'),
                    score=p.get('score') or None,
                    win=p.get('win') == '1',
                    color=p.get('color') or None,
                    start_position=p.get('startposition') or None,
                    new=p.get('new') == '1',
                    rating=_float_attr(p, 'rating'),
                )
                for p in element.findall('players/player')
            ]

            plays.append(Play(
                id=play_id,
                object_id=object_id,
                date=element.get('date'),
                quantity=_int_attr(element, 'quantity', 1),
                length=_int_attr(element, 'length', 0),
                incomplete=element.get('incomplete') == '1',
                location=element.get('location') or None,
                comments=comments.text if comments is not None else None,
                user_id=_int_attr(element, 'userid'),
                players=players,
            ))

        return PlaysPage(
            game_id=game_id,
            page=page,
            total=_int_attr(root, 'total', 0),
            plays=plays,
        )

    def page_count(self, total: int) -> int:
        return math.ceil(total / PLAYS_PER_PAGE)

    def iter_plays(self, game_id: int, first_page: Optional[PlaysPage] = None) -> Iterator[PlaysPage]:
        """
        Yield every page of plays for a game, with rate limiting between requests.

        A first page that was already fetched can be passed in to avoid requesting it twice.
        """
        current = first_page or self.get_plays_page(game_id, 1)
        pages = self.page_count(current.total)
        logger.info(f"Collecting {current.total} plays for {game_id} across {pages} page(s)")

        while True:
            yield current
            if not current.plays or current.page >= pages:
                break
            time.sleep(self.delay_seconds)
            current = self.get_plays_page(game_id, current.page + 1)
