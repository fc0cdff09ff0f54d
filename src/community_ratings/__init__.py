"""
Community Ratings
=================

Batch-fetches community vote tallies for in-game items from a
rate-limited ratings service and folds them into bounded 0-5 scores.
"""

__version__ = "0.1.0"
