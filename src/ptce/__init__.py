"""Predictive Triadic Consensus Engine."""

__version__ = "1.0.0"
