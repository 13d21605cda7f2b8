"""Domain layer: exceptions, enums, and plan document value objects (no I/O)."""
