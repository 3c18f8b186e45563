"""
tiny-huckel JSON API.

Launch with: tiny-huckel serve
Or programmatically: from tiny_huckel.dashboard import launch; launch()
"""

from tiny_huckel.dashboard.server import create_app, launch

__all__ = ["create_app", "launch"]
