"""Core: config, exception handlers, lifespan, and rate limits.

Single place for settings and application bootstrap.
"""
