# portal/services/teams.py
"""Read-only lookup of team info from the static teams JSON file."""
import json
from pathlib import Path
from typing import Any
from fastapi.concurrency import run_in_threadpool


def _read_teams(path: Path) -> dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


async def get_team(path: Path, team_id: str) -> dict[str, Any] | None:
    """
    Return the team entry for `team_id`, or None when unknown.

    Raises:
        OSError / ValueError: If the file is missing or not valid JSON
    """
    teams = await run_in_threadpool(_read_teams, path)
    team = teams.get(team_id) if isinstance(teams, dict) else None
    return team or None
