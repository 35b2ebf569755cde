"""Order service layer (Use Cases).

Orchestrates order creation and the order status state machine.  All
write operations are atomic: the service defines the unit-of-work
boundary.

Order creation runs in two phases inside one transaction:

1. Read-only validation and pricing.  Every product (in request
   order), the customer and the redemption code are checked and the
   totals computed before anything is written, so a rejected request
   leaves no trace.
2. Mutation.  Stock is reserved with conditional decrements (in product
   id order to avoid deadlocks between overlapping orders), the balance
   is debited, and the order, its items and its ``OrderCreated`` outbox
   row are inserted.  A reservation that loses a race with another order
   raises and rolls the whole transaction back.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from uuid import UUID

import structlog
from django.db import models, transaction

from modules.customers.exceptions import CustomerNotFound
from modules.customers.ledger import BalanceLedger
from modules.discounts.validator import DiscountValidator
from modules.orders.constants import DebitBasis, OrderStatus
from modules.orders.events import OrderCreated, OrderStatusChanged
from modules.orders.exceptions import InvalidOrderStatus, OrderNotFound, UnknownOrderStatus
from modules.orders.policy import WorkflowPolicy
from modules.products.exceptions import InsufficientStock, ProductNotFound
from modules.products.ledger import StockLedger

if TYPE_CHECKING:
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.discounts.repositories.interfaces import IDiscountCodeRepository
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

ZERO = Decimal("0.00")


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection (DIP).  The ledgers
    and the discount validator are built from them according to the
    ``WorkflowPolicy`` (read from settings when not given).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        customer_repository: ICustomerRepository,
        product_repository: IProductRepository,
        discount_repository: IDiscountCodeRepository,
        policy: Optional[WorkflowPolicy] = None,
    ) -> None:
        self._policy = policy or WorkflowPolicy.from_settings()
        self._order_repo = order_repository
        self._customer_repo = customer_repository
        self._product_repo = product_repository
        self._stock = StockLedger(product_repository)
        self._balance = BalanceLedger(
            customer_repository,
            allow_negative=self._policy.allow_negative_balance,
        )
        self._discounts = DiscountValidator(
            discount_repository,
            enforce_expiry=self._policy.enforce_code_expiry,
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Price and commit a new order.

        Steps:
        1. Load each product; reject unknown products and quantities
           above current stock; accumulate ``total_price``.
        2. Load the customer.
        3. Resolve the redemption code, if any.
        4. ``final_price = total_price - discount`` (the discount is
           capped at the total).
        5. Reserve stock for every line.
        6. Debit the customer's balance on the policy's basis.
        7. Insert the order (PROCESSING) with its items and outbox event.
        8. Return the order with its relations loaded.

        Raises:
            ProductNotFound: a product does not exist.
            InsufficientStock: a quantity exceeds stock.
            CustomerNotFound: the customer does not exist.
            InvalidDiscountCode: the code is not redeemable.
            InsufficientBalance: the debit is refused by the policy.
        """
        log = logger.bind(customer_id=str(dto.customer_id))
        log.info(
            "order.creation_started",
            item_count=len(dto.items),
            has_redemption_code=dto.redemption_code is not None,
        )

        # 1. Products, stock and subtotal (read-only, request order)
        priced_items: List[Dict[str, Any]] = []
        total_price = ZERO
        for line in dto.items:
            product = self._product_repo.get_by_id(str(line.product_id))
            if product is None:
                raise ProductNotFound(f"Product with ID {line.product_id} not found.")
            if line.quantity > product.stock:
                log.warning(
                    "order.insufficient_stock",
                    product_id=str(product.id),
                    requested=line.quantity,
                    available=product.stock,
                )
                raise InsufficientStock(
                    f"Requested quantity ({line.quantity}) for product ID "
                    f"{product.id} exceeds available stock ({product.stock})."
                )
            total_price += product.price * line.quantity
            priced_items.append(
                {
                    "product_id": product.id,
                    "quantity": line.quantity,
                    "unit_price": product.price,
                }
            )

        # 2. Customer
        customer = self._customer_repo.get_by_id(str(dto.customer_id))
        if customer is None:
            raise CustomerNotFound(f"Customer with ID {dto.customer_id} not found.")

        # 3. Redemption code
        discount = ZERO
        redemption_code = None
        if dto.redemption_code is not None:
            resolved = self._discounts.resolve(dto.redemption_code)
            discount = min(resolved.amount, total_price)
            redemption_code = resolved.code

        # 4. Pricing
        final_price = total_price - discount
        log = log.bind(
            total_price=str(total_price),
            discount=str(discount),
            final_price=str(final_price),
        )

        # 5. Stock, in product id order
        for item in sorted(priced_items, key=lambda i: str(i["product_id"])):
            reservation = self._stock.reserve(item["product_id"], item["quantity"])
            log.info(
                "order.stock_reserved",
                product_id=str(reservation.product_id),
                quantity=reservation.quantity,
                remaining=reservation.stock,
                status=reservation.status,
            )

        # 6. Balance
        debit_amount = (
            final_price
            if self._policy.debit_basis == DebitBasis.FINAL_PRICE
            else total_price
        )
        new_balance = self._balance.debit(customer.id, debit_amount)
        log.info("order.balance_debited", amount=str(debit_amount), balance=str(new_balance))

        # 7. Order record
        order = self._order_repo.create(
            {
                "customer_id": customer.id,
                "total_price": total_price,
                "discount": discount,
                "final_price": final_price,
                "redemption_code": redemption_code,
                "items": priced_items,
            }
        )
        order.add_domain_event(
            OrderCreated(
                aggregate_id=order.id,
                customer_id=str(customer.id),
                total_price=str(total_price),
                discount=str(discount),
                final_price=str(final_price),
                debited_amount=str(debit_amount),
                redemption_code=redemption_code,
                items=[
                    {
                        "product_id": str(item["product_id"]),
                        "quantity": item["quantity"],
                        "unit_price": str(item["unit_price"]),
                    }
                    for item in priced_items
                ],
            )
        )
        self._order_repo.save(order)

        log.info("order.created", order_id=str(order.id))

        # 8. Re-fetch with relations for output
        return self._order_repo.get_by_id(str(order.id)) or order

    @transaction.atomic
    def update_status(self, order_id: UUID, new_status: str) -> Order:
        """Transition an order to a new status.

        Acquires a row-level lock (``SELECT FOR UPDATE``) on the order
        before validating the transition, so two concurrent updates
        cannot both leave PROCESSING.

        Raises:
            UnknownOrderStatus: *new_status* is not an order status.
            OrderNotFound: order does not exist.
            InvalidOrderStatus: transition is not allowed.
        """
        if new_status not in OrderStatus.values:
            raise UnknownOrderStatus(
                "Invalid status. Valid statuses are: " + ", ".join(OrderStatus.values)
            )

        order = self._order_repo.get_for_update(str(order_id))
        if not order:
            raise OrderNotFound(f"Order with ID {order_id} not found.")

        log = logger.bind(
            order_id=str(order_id),
            current_status=order.status,
            new_status=new_status,
        )

        if not order.can_transition_to(new_status):
            log.warning("order.invalid_transition")
            raise InvalidOrderStatus(
                f"Cannot transition order from {order.status} to {new_status}."
            )

        old_status = order.status
        order.status = new_status
        order.add_domain_event(
            OrderStatusChanged(
                aggregate_id=order.id,
                old_status=old_status,
                new_status=new_status,
            )
        )
        self._order_repo.save(order)

        log.info("order.status_updated")
        return self._order_repo.get_by_id(str(order_id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order with ID {order_id} not found.")
        return order

    def list_orders(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Order]":
        """Return orders, optionally filtered."""
        return self._order_repo.list(filters)
