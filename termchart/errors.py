from __future__ import annotations


class ChartConfigError(ValueError):
    """Raised when chart configuration or series input cannot be used."""
