"""Preparer directory port."""

from abc import ABC, abstractmethod
from typing import Optional

from app.application.dtos.preparer import Preparer


class PreparerDirectory(ABC):
    """Port interface for referral-code to preparer lookup."""

    @property
    @abstractmethod
    def default_code(self) -> str:
        """Code of the preparer used when a referral code is missing or unknown."""
        pass

    @abstractmethod
    def resolve(self, code: Optional[str]) -> Preparer:
        """
        Resolve a referral code to its assigned preparer.

        Lookup is case-insensitive. Falls back to the default code, then to the
        first directory entry, then to a hardcoded last-resort preparer.

        Args:
            code: Referral code as submitted (may be None or empty)

        Returns:
            Assigned Preparer (never raises)
        """
        pass

    @abstractmethod
    def list(self) -> list[Preparer]:
        """
        List all preparers in directory order.

        Returns:
            List of preparers
        """
        pass
