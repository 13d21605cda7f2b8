"""Persistence: async engine, ORM models, repositories, unit of work."""
