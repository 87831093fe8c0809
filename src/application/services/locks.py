"""Per-sale mutual exclusion for in-process writers."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict
from uuid import UUID


class SaleLockRegistry:
    """
    Hands out one asyncio.Lock per credit sale.

    Writers that read a sale's installment set and then write derived
    fields back must hold the sale's lock for the whole read-modify-write,
    commit included. Different sales never contend. An entry lives only
    while some task holds or waits for it.
    """

    def __init__(self):
        self._locks: Dict[UUID, asyncio.Lock] = {}
        self._users: Dict[UUID, int] = {}

    @asynccontextmanager
    async def lock_for(self, sale_id: UUID) -> AsyncGenerator[None, None]:
        lock = self._locks.get(sale_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[sale_id] = lock
        self._users[sale_id] = self._users.get(sale_id, 0) + 1

        try:
            async with lock:
                yield
        finally:
            self._users[sale_id] -= 1
            if self._users[sale_id] == 0:
                del self._users[sale_id]
                del self._locks[sale_id]

    def __len__(self) -> int:
        return len(self._locks)


sale_locks = SaleLockRegistry()
