"""HTTP API for the dispute resolution engine."""
