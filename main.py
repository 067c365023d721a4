#!/usr/bin/env python3
"""
Main entry point for the fake IRC server

Usage: python main.py [PORT]
"""

from fake_irc.main import run

if __name__ == "__main__":
    run()
