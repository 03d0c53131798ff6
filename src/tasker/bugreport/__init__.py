"""Bug report submission (JSON POST with environment metadata)."""
