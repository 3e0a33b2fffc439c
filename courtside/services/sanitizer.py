"""Coerce parsed model output into the shapes the UI renders.

Nothing in here raises: missing or mistyped fields are replaced by defaults
so that a partially broken response still produces something to show.
"""
import math
from types import MappingProxyType
from typing import Any, Iterable

from courtside.models import (
    AnalysisResult,
    Game,
    MarketContext,
    PropPrediction,
    Source,
)

DEFAULT_MARKET_CONTEXT = MappingProxyType({
    "spread": "N/A",
    "total": "N/A",
    "summary": "Market data unavailable",
})

DEFAULT_CONFIDENCE = 5
MIN_CONFIDENCE = 1
MAX_CONFIDENCE = 10


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_number(value: Any) -> float | int:
    """Numeric value of a history entry, 0 when it has none."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        try:
            float(value)
        except OverflowError:
            return 0
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else 0
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0
        if not math.isfinite(number):
            return 0
        return int(number) if number.is_integer() else number
    return 0


def _confidence(value: Any) -> int:
    if not _is_number(value):
        return DEFAULT_CONFIDENCE
    # Ints are clamped as-is; huge ones cannot be converted to float.
    if isinstance(value, int):
        return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, value))
    if math.isnan(value):
        return DEFAULT_CONFIDENCE
    if math.isinf(value):
        return MAX_CONFIDENCE if value > 0 else MIN_CONFIDENCE
    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, round(value)))


def sanitize_market_context(value: Any) -> MarketContext:
    """Fill in whichever of spread/total/summary the model left out."""
    context = dict(DEFAULT_MARKET_CONTEXT)
    if isinstance(value, dict):
        for key, field in value.items():
            if field is not None:
                context[key] = field
    return context


def sanitize_prop(value: Any) -> PropPrediction | None:
    """Normalize one prop; returns None for entries that are not objects."""
    if not isinstance(value, dict):
        return None

    prop = dict(value)
    history = value.get("last5Values")
    prop["last5Values"] = [_to_number(v) for v in history] if isinstance(history, list) else []

    protocol = value.get("protocolAnalysis")
    if isinstance(protocol, dict):
        prop["protocolAnalysis"] = {k: v for k, v in protocol.items() if v is not None}
    else:
        prop["protocolAnalysis"] = {}

    prop["confidence"] = _confidence(value.get("confidence"))
    return prop


def extract_sources(chunks: Iterable[Any] | None) -> list[Source]:
    """Keep the citation chunks that point at a web page, in order."""
    sources: list[Source] = []
    for chunk in chunks or []:
        web = chunk.get("web") if isinstance(chunk, dict) else None
        if isinstance(web, dict) and web:
            sources.append({"title": web.get("title"), "uri": web.get("uri")})
    return sources


def sanitize(value: Any, game: Game, sources: list[Source] | None = None) -> AnalysisResult:
    data = value if isinstance(value, dict) else {}
    raw_props = data.get("props")
    if not isinstance(raw_props, list):
        raw_props = []

    props = [p for p in (sanitize_prop(item) for item in raw_props) if p is not None]
    return {
        "game": game,
        "marketContext": sanitize_market_context(data.get("marketContext")),
        "props": props,
        "sources": list(sources or []),
    }


def sanitize_games(value: Any) -> list[Game]:
    """Keep schedule entries that name both teams; fill a stable id if missing."""
    if not isinstance(value, list):
        return []
    games: list[Game] = []
    for item in value:
        if not isinstance(item, dict):
            continue
        home = item.get("homeTeam")
        away = item.get("awayTeam")
        if not home or not away:
            continue
        game = dict(item)
        if not game.get("id"):
            game["id"] = f"{away}-{home}-{item.get('date', '')}".replace(" ", "")
        games.append(game)
    return games
