# portal/api/routers/teams.py
import logging
from fastapi import APIRouter, Response, status

from portal.config import settings
from portal.services.teams import get_team

router = APIRouter(prefix="/api", tags=["teams"])
logger = logging.getLogger(__name__)


@router.get("/team/{team_id}")
async def team_info(team_id: str, response: Response):
    """Serve one team's info from the static teams file."""
    try:
        team = await get_team(settings.teams_file, team_id)
    except (OSError, ValueError) as exc:
        logger.error("[teams] cannot read %s: %s", settings.teams_file, exc)
        response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        return {"message": "Server Error"}

    if team is None:
        response.status_code = status.HTTP_404_NOT_FOUND
        return {"message": "Team not found"}
    return team
