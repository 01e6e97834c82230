"""
Component tests for the storefront API

These tests drive the FastAPI routes end to end: routers, services,
repositories and an in-memory SQLite database, with only outbound mail faked.
"""
