"""Client reference entity."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Client:
    """
    A registered shop client.

    Clients are owned by the client registry; the ledger only reads them
    to link a credit sale to a known person.
    """

    id: int
    full_name: str
    whatsapp: str
    nickname: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Name stored on linked sales: ``"<full name>|<whatsapp>"``."""
        base = self.full_name.strip()
        phone = (self.whatsapp or "").strip()
        return f"{base}|{phone}" if phone else base
