"""HTTP API for guidetiles."""
