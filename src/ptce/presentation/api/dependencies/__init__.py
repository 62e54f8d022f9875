"""API dependency wiring."""
