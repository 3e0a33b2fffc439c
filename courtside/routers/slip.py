from fastapi import APIRouter

from courtside.models import SlipRequest
from courtside.services.slip_service import estimate_american_odds, format_slip

router = APIRouter()


@router.post("/slip/export")
async def export_slip(req: SlipRequest):
    return {
        "text": format_slip(req.props),
        "odds": estimate_american_odds(len(req.props)),
        "legs": len(req.props),
    }
