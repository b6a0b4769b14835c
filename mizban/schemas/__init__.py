"""
Pydantic models for API resources and request bodies.
"""
