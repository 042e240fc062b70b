"""Presentation layers that drive the todo store."""
