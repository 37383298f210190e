"""Implementation details."""
