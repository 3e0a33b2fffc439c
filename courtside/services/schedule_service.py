import logging
import time
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from courtside.config import settings
from courtside.models import Game
from courtside.prompts.schedule import SCHEDULE_PROMPT
from courtside.services.llm import grounded_completion
from courtside.services.normalizer import extract_structure
from courtside.services.sanitizer import sanitize_games

logger = logging.getLogger(__name__)

# Module-level cache: (timestamp, games)
_cache: tuple[float, list[Game]] | None = None


def _date_label(day: datetime) -> str:
    """e.g. "Friday, October 17"."""
    return f"{day:%A, %B} {day.day}"


def _build_schedule_prompt(now: datetime | None = None) -> str:
    today = now or datetime.now(ZoneInfo(settings.SCHEDULE_TIMEZONE))
    tomorrow = today + timedelta(days=1)
    return SCHEDULE_PROMPT.format(today=_date_label(today), tomorrow=_date_label(tomorrow))


async def _fetch_games() -> list[Game]:
    """One grounded call for today's and tomorrow's games; [] on any failure."""
    try:
        resp = await grounded_completion(
            _build_schedule_prompt(), model=settings.SCHEDULE_MODEL
        )
    except Exception:
        logger.error("Error fetching games", exc_info=True)
        return []

    try:
        payload = extract_structure(resp["text"] or "[]")
    except Exception:
        logger.warning("JSON extraction failed for games, returning empty list", exc_info=True)
        return []
    return sanitize_games(payload)


async def refresh_schedule() -> list[Game]:
    """Fetch the schedule, bypassing the cache. Empty results are not cached."""
    global _cache

    games = await _fetch_games()
    if games:
        _cache = (time.time(), list(games))
    return games


async def get_upcoming_games() -> list[Game]:
    """Get upcoming games with caching."""
    now = time.time()
    if _cache and (now - _cache[0]) < settings.SCHEDULE_CACHE_TTL:
        return list(_cache[1])
    return await refresh_schedule()


def clear_cache() -> None:
    global _cache
    _cache = None
