"""
CLI Module.

Typer command-line client for the MizbanCloud API.

Architecture:
- The root app (main.py) loads the config once per invocation
- Commands are thin: build a request body, call APIClient, render output
- All failures surface as MizbanError and leave through handle_errors()

Usage:
    mizban --help
    mizban login
    mizban server list
    mizban dns list --domain 7
"""
