"""Command-line layer (Typer + Rich).

Outermost layer: it may import from `core` and `adapters`, nothing imports it.
"""
