"""Mapping of application user identifiers to Telegram chat ids."""

from __future__ import annotations

import re

NUMERIC_IDENTIFIER = re.compile(r"[0-9]+")


class RecipientResolver:
    """In-memory registry filled when users send /start to the bot."""

    def __init__(self) -> None:
        self._addresses: dict[str, int] = {}

    def register(self, identifier: str, address: int) -> None:
        self._addresses[identifier] = address

    def resolve(self, identifier: str) -> int | None:
        """Numeric identifiers are chat ids already; others need a prior /start."""
        if NUMERIC_IDENTIFIER.fullmatch(identifier):
            return int(identifier)
        return self._addresses.get(identifier)

    def __len__(self) -> int:
        return len(self._addresses)
