import logging

from courtside.config import settings
from courtside.models import AnalysisResult, Game, PropFilter
from courtside.prompts.analyze_props import ANALYST_INSTRUCTIONS, ANALYZE_PROPS_PROMPT
from courtside.services.analysis_tracker import AnalysisTracker, tracker as default_tracker
from courtside.services.llm import grounded_completion
from courtside.services.normalizer import extract_structure
from courtside.services.sanitizer import extract_sources, sanitize

logger = logging.getLogger(__name__)


def _build_analysis_prompt(game: Game, prop_filter: PropFilter) -> str:
    focus = f" (Focus ONLY on {prop_filter} props)" if prop_filter != "ALL" else ""
    return ANALYZE_PROPS_PROMPT.format(
        away_team=game.get("awayTeam", ""),
        home_team=game.get("homeTeam", ""),
        date=game.get("date", ""),
        focus=focus,
    )


async def analyze_game_props(game: Game, prop_filter: PropFilter = "ALL") -> AnalysisResult:
    """Deep-dive one matchup: grounded model call, JSON recovery, sanitization.

    Remote and extraction failures propagate to the caller unchanged.
    """
    resp = await grounded_completion(
        _build_analysis_prompt(game, prop_filter),
        instructions=ANALYST_INSTRUCTIONS,
        model=settings.ANALYSIS_MODEL,
    )
    data = extract_structure(resp["text"] or "{}")
    result = sanitize(data, game, extract_sources(resp["grounding_chunks"]))
    logger.info(
        "Analyzed %s @ %s: %d props, %d sources",
        game.get("awayTeam"), game.get("homeTeam"),
        len(result["props"]), len(result["sources"]),
    )
    return result


async def analyze_for_session(
    session_id: str,
    game: Game,
    prop_filter: PropFilter = "ALL",
    tracker: AnalysisTracker = default_tracker,
) -> AnalysisResult:
    """Like analyze_game_props, but raises StaleAnalysisError if the session moved on."""
    generation = tracker.begin(session_id)
    try:
        result = await analyze_game_props(game, prop_filter)
        tracker.check(session_id, generation)
    finally:
        tracker.release(session_id, generation)
    return result
