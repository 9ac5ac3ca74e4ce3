"""
Request body schemas (pydantic)
"""
