"""HTTP API for the paper notes service."""
