"""
MizbanCloud CLI.

Command-line client for the MizbanCloud API: cloud servers, volumes,
snapshots, networks, CDN domains and their security/performance settings,
and support tickets.
"""

__version__ = "0.1.0"
