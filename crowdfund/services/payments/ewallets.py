"""
E-wallet payment methods.
Both are simulated gateways that approve every charge; real integrations replace `pay`.
"""
import logging
from typing import Dict, Optional

from crowdfund.services.payments.base import PaymentMethod

logger = logging.getLogger(__name__)


class GopayPayment(PaymentMethod):
    name = "GOPAY"

    async def pay(self, amount: int, phone_number: str) -> bool:
        logger.info(f"Processing GOPAY payment of {amount} from {phone_number}")
        return True


class DanaPayment(PaymentMethod):
    name = "DANA"

    async def pay(self, amount: int, phone_number: str) -> bool:
        logger.info(f"Processing DANA payment of {amount} from {phone_number}")
        return True


PAYMENT_METHODS: Dict[str, PaymentMethod] = {
    method.name: method for method in (GopayPayment(), DanaPayment())
}


def get_payment_method(name: str, methods: Optional[Dict[str, PaymentMethod]] = None) -> Optional[PaymentMethod]:
    """Look a method up by name, ignoring case and surrounding whitespace."""
    methods = PAYMENT_METHODS if methods is None else methods
    return methods.get((name or "").strip().upper())
