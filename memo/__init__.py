"""
memo - to-do item detail screen for the terminal.

Tasks live in one JSON blob under a fixed key of a local key/value store;
the detail presenter edits or deletes a single task through that store.
"""

__version__ = "0.1.0"
