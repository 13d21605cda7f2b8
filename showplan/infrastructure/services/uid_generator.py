"""CUID2-backed uid generator."""

from showplan.shared.utils.generators import generate_uid


class CuidUidGenerator:
    """Produces '<prefix>_<cuid>' uids (e.g. 'show_tz4a98xxat96iws9zmbrgj3a')."""

    def new_uid(self, prefix: str) -> str:
        return generate_uid(prefix)
