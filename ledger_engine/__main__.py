"""
Main entry point for running ledger_engine as a module.

Usage:
    python -m ledger_engine [options]
"""
import sys
from .cli import main

if __name__ == "__main__":
    sys.exit(main())
