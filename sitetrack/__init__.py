"""
SiteTrack workflow-status engine for construction project documents.
"""

__version__ = "0.1.0"
