"""Integration tests for components working together.

Coverage:
    - FastAPI host endpoints via ASGI transport
    - Question and upload workflows through the real client and pipeline
"""
