"""
Main entry point for popindex.

Usage:
    python -m popindex_app --help
    pop --help  (if installed)
"""

from popindex_app.cli import main


if __name__ == "__main__":
    main()
