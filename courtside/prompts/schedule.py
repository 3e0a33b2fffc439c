SCHEDULE_PROMPT = """Find the OFFICIAL and COMPLETE NBA schedule for Today ({today}) and Tomorrow ({tomorrow}).

TASK:
1. Search for "NBA Schedule {today}" and "NBA Schedule {tomorrow}".
2. List EVERY game scheduled.
3. If there are no games today, clearly list the games for the next available game day.

Return a strictly formatted JSON array of objects.
Each object must have:
- id: a unique string (e.g., "LAL-GSW-20240520")
- homeTeam: full team name
- awayTeam: full team name
- time: string (e.g., "7:30 PM ET")
- date: string (e.g., "Oct 24")

Output ONLY the JSON array. No markdown, no explanation.
"""
