"""
StatusPage.io integration tools for workflow agents.
"""

__version__ = "0.1.0"
