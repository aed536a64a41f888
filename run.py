#!/usr/bin/env python3
"""
TOKEN RUSH Launcher
====================
Run this script to start the game.
"""

from token_rush.main import main

if __name__ == "__main__":
    main()
