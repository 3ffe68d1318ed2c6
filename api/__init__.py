"""HTTP API for the treatment plan assistant."""
