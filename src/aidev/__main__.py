"""Entry point for running the client as a module.

Usage:
    python -m aidev
"""

from aidev.cli import main

if __name__ == "__main__":
    main()
