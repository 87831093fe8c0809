"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from uuid import UUID

from src.domain.entities import (
    Client,
    CreditSale,
    Installment,
    RevenueTransaction,
    SystemSettings,
)


class CreditSaleRepository(ABC):
    """
    Abstract repository for CreditSale persistence.

    A credit sale is always loaded together with its installments,
    ordered by installment number.
    """

    @abstractmethod
    async def add(self, sale: CreditSale) -> CreditSale:
        """
        Persist a new sale and all of its installments as one unit.

        Args:
            sale: The sale, with installments attached

        Returns:
            The saved sale

        Raises:
            CreditSaleCreationFailedException: If any row could not be
                written; nothing of the sale remains stored
        """
        ...

    @abstractmethod
    async def get_by_id(
        self,
        sale_id: UUID,
        for_update: bool = False,
    ) -> Optional[CreditSale]:
        """
        Retrieve a sale by ID.

        Args:
            sale_id: The sale to load
            for_update: Lock the sale row until the unit of work ends;
                writers pass True before a read-modify-write

        Returns:
            The sale if found, None otherwise
        """
        ...

    @abstractmethod
    async def get_by_installment_id(self, installment_id: UUID) -> Optional[CreditSale]:
        """
        Retrieve the sale owning an installment.

        Returns:
            The owning sale if the installment exists, None otherwise
        """
        ...

    @abstractmethod
    async def list_all(self) -> List[CreditSale]:
        """
        Retrieve every sale.

        Returns:
            Sales ordered by sale date descending
        """
        ...

    @abstractmethod
    async def list_unpaid(self) -> List[CreditSale]:
        """Retrieve every sale whose stored status is not PAID."""
        ...

    @abstractmethod
    async def mark_installment_paid(
        self,
        installment_id: UUID,
        paid_date: date,
        payment_method: str,
    ) -> bool:
        """
        Record a payment on an installment that is not yet paid.

        The write is conditional on the stored status so that two writers
        cannot both pay the same installment.

        Returns:
            True if the installment transitioned to PAID, False if it was
            already paid
        """
        ...

    @abstractmethod
    async def save_status_refresh(
        self,
        sale: CreditSale,
        installments: List[Installment],
    ) -> None:
        """
        Store the derived fields of a sale and the given installment statuses.

        Args:
            sale: Sale carrying freshly computed status and totals
            installments: Installments whose status changed
        """
        ...

    @abstractmethod
    async def commit(self) -> None:
        """
        Make every write of the current unit of work durable.

        Called while the sale lock is still held, so the next writer of
        the same sale reads the committed installment set.

        Raises:
            PersistenceException: If the commit fails
        """
        ...


class RevenueRepository(ABC):
    """Abstract repository for revenue transactions."""

    @abstractmethod
    async def add(self, transaction: RevenueTransaction) -> RevenueTransaction:
        """Persist a revenue transaction."""
        ...

    @abstractmethod
    async def list_between(self, start: date, end: date) -> List[RevenueTransaction]:
        """
        Retrieve transactions dated within [start, end].

        Returns:
            Transactions ordered by date ascending
        """
        ...


class ClientRepository(ABC):
    """Read-only access to the client registry."""

    @abstractmethod
    async def get_by_id(self, client_id: int) -> Optional[Client]:
        """Retrieve a client by ID."""
        ...

    @abstractmethod
    async def find_by_full_name(self, full_name: str) -> List[Client]:
        """
        Case-insensitive exact match on the client's full name.

        Returns:
            All clients whose trimmed full name matches
        """
        ...


class SystemSettingsRepository(ABC):
    """Single-row storage of shop-level settings."""

    @abstractmethod
    async def get(self) -> Optional[SystemSettings]:
        """Retrieve stored settings, or None if never saved."""
        ...

    @abstractmethod
    async def save(self, settings: SystemSettings) -> SystemSettings:
        """Insert or update the settings row."""
        ...
