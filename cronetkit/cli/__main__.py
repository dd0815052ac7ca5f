"""
Entry point for running cronetkit CLI as a module.

Usage: python -m cronetkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
