#!/usr/bin/env python3
"""
Convenience entry point for running pettime directly.

Usage: python pettime.py [command] [options]
"""

from pettime.cli.app import app

if __name__ == "__main__":
    app()
