"""BOM explosion and production-forecasting engine."""

__version__ = "0.1.0"
