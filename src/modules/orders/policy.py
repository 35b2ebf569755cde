"""Settings-driven knobs of the order workflow."""

from __future__ import annotations

from dataclasses import dataclass

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from modules.orders.constants import DebitBasis


@dataclass(frozen=True)
class WorkflowPolicy:
    """Business policy points of order creation.

    - ``allow_negative_balance``: a debit may take the balance below zero.
    - ``debit_basis``: debit ``total_price`` (before discount) or
      ``final_price``.
    - ``enforce_code_expiry``: reject active codes past ``expired_at``.
    """

    allow_negative_balance: bool = True
    debit_basis: str = DebitBasis.TOTAL_PRICE
    enforce_code_expiry: bool = False

    def __post_init__(self) -> None:
        if self.debit_basis not in DebitBasis.values:
            raise ImproperlyConfigured(
                f"Unknown order debit basis {self.debit_basis!r}; "
                f"expected one of {', '.join(DebitBasis.values)}."
            )

    @classmethod
    def from_settings(cls) -> WorkflowPolicy:
        conf = settings.ORDER_WORKFLOW
        return cls(
            allow_negative_balance=conf["ALLOW_NEGATIVE_BALANCE"],
            debit_basis=conf["DEBIT_BASIS"],
            enforce_code_expiry=conf["ENFORCE_CODE_EXPIRY"],
        )
