"""Domain events for the Orders bounded context.

Payload fields default to empty values because ``DomainEvent``'s own
fields already carry defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    """Raised when an order is committed with its stock and balance changes."""

    customer_id: Optional[str] = None
    total_price: str = "0.00"
    discount: str = "0.00"
    final_price: str = "0.00"
    debited_amount: str = "0.00"
    redemption_code: Optional[str] = None
    items: List[Dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class OrderStatusChanged(DomainEvent):
    """Raised when an order moves out of PROCESSING."""

    old_status: str = ""
    new_status: str = ""
