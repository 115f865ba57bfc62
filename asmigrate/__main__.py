"""Allow `python -m asmigrate`."""

from .cli import app

app()
