from fastapi import APIRouter

from courtside.services.schedule_service import get_upcoming_games

router = APIRouter()


@router.get("/games")
async def games():
    return {"games": await get_upcoming_games()}
