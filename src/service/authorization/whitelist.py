"""Destination whitelist."""

from typing import Tuple

from src.core.config import Settings


def parse_whitelist(raw: str) -> Tuple[str, ...]:
    """Split a comma-separated whitelist, trimming and dropping empties."""
    if not raw:
        return ()
    return tuple(entry.strip() for entry in raw.split(",") if entry.strip())


class WhitelistGuard:
    """
    Exact-match allow-list of settlement destinations.

    The list is re-read from settings on each call so it always reflects the
    configuration in effect. An empty configuration authorizes nothing.
    """

    def __init__(self, settings: Settings):
        self._settings = settings

    def entries(self) -> Tuple[str, ...]:
        return parse_whitelist(self._settings.treasury_dest_whitelist)

    def is_whitelisted(self, dest: str) -> bool:
        if not dest:
            return False
        return dest in self.entries()
