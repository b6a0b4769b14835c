"""
Core infrastructure shared by the CLI: configuration, logging, exceptions.
"""
