"""
FILE: memo/cli/__init__.py
PURPOSE: Typer CLI for one-shot commands
"""
