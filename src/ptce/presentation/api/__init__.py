"""FastAPI application for the consensus engine."""
