"""
Main module entry point.

This allows running the command line client as: python -m src.main
"""

from .cli import main

if __name__ == "__main__":
    main()
