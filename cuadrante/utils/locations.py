from cuadrante.core.config import settings
from cuadrante.core.exceptions import InvalidLocation


def check_location(location: str) -> str:
    """Returns the configured spelling of ``location`` (case-insensitive match)."""
    wanted = (location or "").strip().lower()
    for known in settings.locations:
        if known.lower() == wanted:
            return known
    raise InvalidLocation(location)
