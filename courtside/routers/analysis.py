import logging

from fastapi import APIRouter, HTTPException, Response

from courtside.models import AnalysisRequest
from courtside.services.analysis_service import analyze_for_session, analyze_game_props
from courtside.services.analysis_tracker import StaleAnalysisError, tracker

logger = logging.getLogger(__name__)

router = APIRouter()

RETRY_MESSAGE = "Analysis failed. Please try again. The AI might be overloaded."


@router.post("/analysis")
async def analysis(req: AnalysisRequest):
    game = req.game.model_dump(exclude_none=True)
    try:
        if req.session_id:
            return await analyze_for_session(req.session_id, game, req.filter)
        return await analyze_game_props(game, req.filter)
    except StaleAnalysisError:
        logger.info("Dropping stale analysis for session %s", req.session_id)
        raise HTTPException(status_code=409, detail="Analysis superseded by a newer request")
    except Exception:
        logger.error(
            "Analysis failed: %s @ %s",
            req.game.awayTeam, req.game.homeTeam,
            exc_info=True,
        )
        raise HTTPException(status_code=502, detail=RETRY_MESSAGE)


@router.delete("/analysis/{session_id}", status_code=204)
async def cancel_analysis(session_id: str):
    tracker.cancel(session_id)
    return Response(status_code=204)
