"""
Main module entry point.

This allows running forecasts as: python -m ar_forecast.main
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
