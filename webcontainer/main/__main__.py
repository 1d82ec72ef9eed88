"""
Main module entry point.

This allows running the container as: python -m webcontainer.main
"""

from .server import main

if __name__ == "__main__":
    main()
