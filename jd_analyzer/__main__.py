"""
Main entry point for the jd_analyzer package.

Usage:
    python -m jd_analyzer [command] [options]

See 'python -m jd_analyzer --help' for available commands.
"""

from jd_analyzer.cli import main

if __name__ == "__main__":
    main()
