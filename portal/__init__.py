"""
Hero Portal backend package.

This package provides a FastAPI application that owns the portal's data
access (content vault, accounts, rankings, comics) on top of Firebase, with
in-memory and SQL fallbacks so it runs locally without cloud credentials.
"""
