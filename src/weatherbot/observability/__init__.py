"""Observability helpers for WeatherBot."""

from weatherbot.observability.logging import ContextLogger, setup_logging

__all__ = ["ContextLogger", "setup_logging"]
