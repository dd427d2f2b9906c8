"""
Convenience entry point for running slotgrid directly.

Usage: python -m slotgrid [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
