"""
Pydantic request models for the InsightMaster API.
"""
