"""Allow running as ``python -m calcreducer``."""

from calcreducer.cli import app

app()
