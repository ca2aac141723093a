"""
StatusPage Tool - Components, incidents and metrics on StatusPage.io.
"""

from .statuspage_tool import register_tools

__all__ = ["register_tools"]
