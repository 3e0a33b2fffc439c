from courtside.models import PropFilter, PropPrediction

SLIP_HEADER = "🏆 COURTSIDE IQ SLIP 🏆"

# Standard -110 juice on every leg.
LEG_DECIMAL_ODDS = 1.91


def _same_leg(a: PropPrediction, b: PropPrediction) -> bool:
    return a.get("player") == b.get("player") and a.get("stat") == b.get("stat")


def toggle_leg(slip: list[PropPrediction], prop: PropPrediction) -> list[PropPrediction]:
    """Add ``prop`` to the slip, or remove it if the same player/stat is already on it."""
    if any(_same_leg(p, prop) for p in slip):
        return [p for p in slip if not _same_leg(p, prop)]
    return [*slip, prop]


def filter_props(props: list[PropPrediction], direction: PropFilter) -> list[PropPrediction]:
    if direction == "ALL":
        return list(props)
    return [p for p in props if p.get("prediction") == direction]


def estimate_american_odds(leg_count: int) -> str | None:
    """Combined American odds for a parlay of ``leg_count`` -110 legs."""
    if leg_count <= 0:
        return None
    decimal = LEG_DECIMAL_ODDS ** leg_count
    if decimal >= 2:
        return f"+{round((decimal - 1) * 100)}"
    return f"-{round(100 / (decimal - 1))}"


def format_slip(props: list[PropPrediction]) -> str:
    """Plain-text slip for the clipboard."""
    lines = [
        f"{p.get('player', '')} {p.get('prediction', '')} {p.get('line', '')} {p.get('stat', '')}"
        for p in props
    ]
    return (
        f"{SLIP_HEADER}\n\n"
        + "\n".join(lines)
        + f"\n\nEst. Odds: {estimate_american_odds(len(props)) or 'N/A'}"
    )
