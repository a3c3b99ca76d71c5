#!/usr/bin/env python3
"""Development runner for the localbak command line"""
from localbak.cli import cli

if __name__ == '__main__':
    # Same as the installed `localbak` console script
    cli()
