"""Operator entrypoints (run with python -m appsimple.scripts.<name>)."""
