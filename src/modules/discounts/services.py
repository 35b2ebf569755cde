"""Discount code service layer (Use Cases).

Business rules enforced here:
- Codes are unique ignoring case; a duplicate on create or rename is a
  Conflict.  The database constraint on ``Lower(code)`` backs this up
  for concurrent writers.
- ``verify`` tells unknown codes (404) from known but unusable ones (400).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import structlog
from django.db import IntegrityError, models, transaction

from modules.core.exceptions import InvalidRequest
from modules.discounts.exceptions import DiscountCodeAlreadyExists, DiscountCodeNotFound
from modules.discounts.models import DiscountCode
from modules.discounts.validator import DiscountValidator

if TYPE_CHECKING:
    from modules.discounts.dtos import CreateDiscountCodeDTO, UpdateDiscountCodeDTO
    from modules.discounts.repositories.interfaces import IDiscountCodeRepository
    from modules.discounts.validator import ResolvedDiscount

logger = structlog.get_logger(__name__)


class DiscountCodeService:
    """Application service for discount code use-cases."""

    def __init__(
        self,
        repository: IDiscountCodeRepository,
        validator: Optional[DiscountValidator] = None,
    ) -> None:
        self._repo = repository
        self._validator = validator or DiscountValidator(repository)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_code(self, dto: CreateDiscountCodeDTO) -> DiscountCode:
        """Create a discount code.

        Raises:
            DiscountCodeAlreadyExists: the code is taken (ignoring case).
        """
        log = logger.bind(code=dto.code)
        if self._repo.code_exists(dto.code):
            log.warning("discount_code.duplicate")
            raise DiscountCodeAlreadyExists(f"Code {dto.code} already exists.")

        discount_code = DiscountCode(
            code=dto.code,
            discount=dto.discount,
            status=dto.status,
            expired_at=dto.expired_at,
        )
        discount_code = self._save_unique(discount_code)
        log.info("discount_code.created", discount_code_id=str(discount_code.id))
        return discount_code

    @transaction.atomic
    def update_code(self, id: str, dto: UpdateDiscountCodeDTO) -> DiscountCode:
        """Apply the supplied fields to an existing code.

        Raises:
            DiscountCodeNotFound: no code with this id.
            DiscountCodeAlreadyExists: the new code value is taken.
        """
        discount_code = self._repo.get_by_id(id)
        if not discount_code:
            raise DiscountCodeNotFound(f"Code with ID {id} not found.")

        changes = dto.changes()
        log = logger.bind(discount_code_id=str(id))

        new_code = changes.get("code")
        if new_code is not None and self._repo.code_exists(new_code, exclude_id=str(id)):
            log.warning("discount_code.duplicate", code=new_code)
            raise DiscountCodeAlreadyExists(f"Code {new_code} already exists.")

        for field, value in changes.items():
            setattr(discount_code, field, value)

        discount_code = self._save_unique(discount_code)
        log.info("discount_code.updated", fields=sorted(changes))
        return discount_code

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_codes(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[DiscountCode]":
        return self._repo.list(filters)

    def verify_code(self, code: Optional[str]) -> tuple[DiscountCode, ResolvedDiscount]:
        """Check that *code* exists and is redeemable right now.

        Raises:
            InvalidRequest: no code given.
            DiscountCodeNotFound: no such code.
            InvalidDiscountCode: the code exists but is not redeemable.
        """
        if not code or not code.strip():
            raise InvalidRequest("Code is required.")

        discount_code = self._repo.get_by_code(code.strip())
        if discount_code is None:
            raise DiscountCodeNotFound("Code not found.")
        return discount_code, self._validator.resolve(code)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _save_unique(self, discount_code: DiscountCode) -> DiscountCode:
        try:
            with transaction.atomic():
                return self._repo.save(discount_code)
        except IntegrityError as exc:
            logger.warning("discount_code.duplicate_on_write", code=discount_code.code)
            raise DiscountCodeAlreadyExists(
                f"Code {discount_code.code} already exists."
            ) from exc
