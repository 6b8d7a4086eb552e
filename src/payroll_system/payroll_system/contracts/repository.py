from __future__ import annotations

from typing import Iterable, Mapping, Protocol

from .model import ContractRate


class ContractRepository(Protocol):
    def get_active_for_staff(self, staff_ids: Iterable[int]) -> Mapping[int, ContractRate]:
        """Newest ACTIVE contract per staff id; staff without one are absent."""

        raise NotImplementedError
