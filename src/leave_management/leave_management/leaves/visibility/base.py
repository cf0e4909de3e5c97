from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...core.enums import Department


class VisibilityPolicy(ABC):
    """Strategy Pattern: decide which student cohorts a reviewer may see."""

    @abstractmethod
    def allows(self, department: Optional[Department], year: Optional[int]) -> bool:
        raise NotImplementedError


class NoVisibility(VisibilityPolicy):
    """Students and any role without reviewer duties."""

    def allows(self, department: Optional[Department], year: Optional[int]) -> bool:
        return False
