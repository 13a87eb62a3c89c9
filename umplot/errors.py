from __future__ import annotations


class PlotDataError(ValueError):
    """Raised when plot input (series, styles, plot files) cannot be used."""
