"""
Presentation layer (FastAPI).
"""
