"""External client interfaces."""

from abc import ABC, abstractmethod

from src.domain.entities import LedgerResult


class LedgerClient(ABC):
    """
    Abstract client for the settlement ledger.

    Implementations return a ``LedgerReceipt`` on success and a
    ``LedgerFailure`` when the transfer is refused; they do not raise
    for refused transfers.
    """

    @abstractmethod
    async def pay_lamports(self, dest: str, lamports: int) -> LedgerResult:
        """
        Transfer native lamports to a destination.

        Args:
            dest: Destination account address
            lamports: Positive integer amount

        Returns:
            LedgerReceipt, or LedgerFailure with code
            ``invalid_destination_format`` or ``invalid_amount``
        """
        ...

    @abstractmethod
    async def pay_token(self, mint: str, dest: str, amount_minor: int) -> LedgerResult:
        """
        Transfer a token amount to a destination.

        Args:
            mint: Token mint address
            dest: Destination account address
            amount_minor: Positive integer amount in minor units

        Returns:
            LedgerReceipt, or LedgerFailure with code ``invalid_mint``,
            ``invalid_destination_format`` or ``invalid_amount_minor``
        """
        ...
