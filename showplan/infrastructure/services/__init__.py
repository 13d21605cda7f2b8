"""Infrastructure service implementations."""

from showplan.infrastructure.services.uid_generator import CuidUidGenerator

__all__ = ["CuidUidGenerator"]
