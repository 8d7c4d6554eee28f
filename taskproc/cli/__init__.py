"""
FILE: taskproc/cli/__init__.py
PURPOSE: Typer-based command line interface
"""
