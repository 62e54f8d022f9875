"""Application layer: use cases orchestrating the tournament domain."""
