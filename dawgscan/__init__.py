"""DawgScan - passive classifier for web page security headers and technology stack."""

__version__ = "1.0.0"
