"""Version information for the Remitano Python SDK"""

__version__ = "0.1.0"
