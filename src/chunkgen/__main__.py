"""Allow running as python -m chunkgen."""

from .cli import main

main()
