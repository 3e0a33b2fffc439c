"""Domain shapes shared by the services and the HTTP layer.

The TypedDicts mirror the JSON the browser consumes, so keys are camelCase.
"""
from typing import Literal, TypedDict

from pydantic import BaseModel, Field


class Game(TypedDict, total=False):
    id: str
    homeTeam: str
    awayTeam: str
    time: str
    date: str
    utcTime: str


class MarketContext(TypedDict):
    spread: str
    total: str
    summary: str


class ProtocolAnalysis(TypedDict, total=False):
    refereeFactor: str
    injuryIntel: str
    schemeMismatch: str
    sharpMoney: str


class PropPrediction(TypedDict, total=False):
    player: str
    team: str
    stat: str  # e.g. "Points", "Rebounds + Assists"
    line: float
    prediction: Literal["OVER", "UNDER"]
    confidence: int  # 1-10
    rationale: str
    xFactor: str
    last5History: str  # e.g. "4/5"
    averageLast5: float
    last5Values: list[float]  # oldest -> newest
    opponentRank: str  # e.g. "28th (Soft)"
    protocolAnalysis: ProtocolAnalysis


class Source(TypedDict):
    title: str
    uri: str


class AnalysisResult(TypedDict):
    game: Game
    marketContext: MarketContext
    props: list[PropPrediction]
    sources: list[Source]


class ModelResponse(TypedDict):
    text: str
    grounding_chunks: list[dict]


PropFilter = Literal["OVER", "UNDER", "ALL"]


# ── Request bodies ──

class GameIn(BaseModel):
    id: str
    homeTeam: str
    awayTeam: str
    time: str = ""
    date: str = ""
    utcTime: str | None = None


class AnalysisRequest(BaseModel):
    game: GameIn
    filter: PropFilter = "ALL"
    session_id: str | None = None


class SlipRequest(BaseModel):
    props: list[dict] = Field(default_factory=list)
