"""Infrastructure adapters: configuration, evaluation sources, persistence, monitoring."""
