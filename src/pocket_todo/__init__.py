"""pocket-todo: a single-screen todo list persisted in a local key-value store."""

__version__ = "0.1.0"
