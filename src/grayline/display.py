"""Text readouts shown next to the map."""

from datetime import datetime

from grayline.ephemeris import as_utc


def format_subsolar(lat: float, lon: float) -> str:
    """``"subsolar  23.4°N  132.3°W"``: magnitudes to one decimal plus hemisphere letter."""
    ns = "N" if lat >= 0 else "S"
    ew = "E" if lon >= 0 else "W"
    return f"subsolar  {abs(lat):.1f}°{ns}  {abs(lon):.1f}°{ew}"


def format_utc_clock(instant: datetime) -> str:
    """``"HH:MM:SS"`` in UTC."""
    return as_utc(instant).strftime("%H:%M:%S")
