"""
FILE: taskproc/core/__init__.py
PURPOSE: View engine (store, expressions, ledger, session coordinator)
"""
