"""
Entry point for running cronetkit CLI as a module.

Usage: python -m cronetkit [command] [options]
"""

from cronetkit.cli.parser import main

if __name__ == "__main__":
    main()
