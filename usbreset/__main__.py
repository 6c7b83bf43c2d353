#!/usr/bin/env python3
"""
Main entry point for the usbreset tool.
"""
from usbreset.cli import main

if __name__ == "__main__":
    import sys
    sys.exit(main())
