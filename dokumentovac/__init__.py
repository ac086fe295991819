"""
dokumentovac - terminal client for the Dokumentovač document service
"""

__version__ = "0.1.0"
