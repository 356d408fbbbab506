"""HTTP surface for the chess rules engine."""
