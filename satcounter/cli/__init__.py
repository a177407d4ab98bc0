"""
satcounter.cli - Typer application behind the `satcounter` console script.

    python -m satcounter.cli --help
"""

from .main import app, main

__all__ = ["app", "main"]
