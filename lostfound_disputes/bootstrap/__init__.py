"""Bootstrap wiring for the dispute engine."""
