"""Terminal weather dashboard backed by Open-Meteo."""

__version__ = "1.0.0"
