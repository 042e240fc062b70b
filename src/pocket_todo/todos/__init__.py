"""
Todo subsystem.

Components:
- todo_models.py: data structures (Todo, TodoSnapshot, StatusEvent)
- todo_store.py: in-memory list + edit mode, synchronized to a key-value backend
- status.py: transient status banner with a debounced clear
"""
