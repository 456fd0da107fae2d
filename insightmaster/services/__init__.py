"""
InsightMaster services.
"""
