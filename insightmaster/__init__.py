"""
InsightMaster application package.

Article capture, user insight annotation and comparison against AI and
heuristic insight analyses.
"""

__version__ = "1.0.0"
