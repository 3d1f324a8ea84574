"""
caproute: capability-based routing of chat requests to registered models.
"""

__version__ = "0.1.0"
