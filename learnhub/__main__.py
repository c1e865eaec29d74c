"""Allow running as ``python -m learnhub``."""

from learnhub.cli import main

main()
