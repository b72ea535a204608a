"""
Client for the internal REST surface of the Snowsight console and the classic web UI.
"""

__version__ = "0.4.0"
