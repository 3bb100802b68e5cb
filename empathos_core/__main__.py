"""Entry point for `python -m empathos_core`."""

from empathos_core.cli import app

app()
