"""Qt event-loop integration for the memory game."""

from .round_ticker import RoundTicker

__all__ = ["RoundTicker"]
