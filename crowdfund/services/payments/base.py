"""
Base interface for wallet top-up payment methods.
"""
from abc import ABC, abstractmethod


class PaymentMethod(ABC):
    """A payment channel that charges the payer's account for a top-up."""

    name: str

    @abstractmethod
    async def pay(self, amount: int, phone_number: str) -> bool:
        """
        Charge `amount` to the account registered to `phone_number`.

        Returns:
            True if the charge went through.
        """
        pass
