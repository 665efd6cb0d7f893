# src/taskm/__init__.py

"""taskm: a small single-user task manager with background archiving."""

__version__ = "0.1.0"
