#!/usr/bin/env python3
"""
Main entry point for toolfetch when run as a module.

This allows the package to be executed with: python -m toolfetch
"""

from .cli import main

if __name__ == '__main__':
    main()
