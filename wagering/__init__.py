"""Odds, stake sizing and margin removal for betting markets."""

__version__ = "0.1.0"
