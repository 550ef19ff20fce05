"""Command-line tools (non-interactive)."""
