"""
FILE: memo/core/__init__.py
PURPOSE: Storage, models and notifications shared by every screen
"""
