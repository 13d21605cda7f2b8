"""Infrastructure: persistence (SQLAlchemy) and service implementations."""
