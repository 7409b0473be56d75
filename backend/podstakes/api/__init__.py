"""HTTP API for podstakes."""
