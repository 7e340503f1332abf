"""HTTP API for the group address engine."""
