"""Unit tests for DiscountCodeService and the discount code model."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest
from django.db import IntegrityError, transaction

from modules.core.exceptions import InvalidRequest
from modules.discounts.dtos import CreateDiscountCodeDTO, UpdateDiscountCodeDTO
from modules.discounts.exceptions import (
    DiscountCodeAlreadyExists,
    DiscountCodeNotFound,
    InvalidDiscountCode,
)
from modules.discounts.models import DiscountCode, DiscountCodeStatus
from modules.discounts.repositories.django_repository import DiscountCodeDjangoRepository
from modules.discounts.services import DiscountCodeService

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return DiscountCodeService(repository=DiscountCodeDjangoRepository())


class TestCreateCode:
    def test_creates_code(self, service):
        code = service.create_code(
            CreateDiscountCodeDTO(code="WELCOME", discount=Decimal("5.00"), status="active")
        )

        assert DiscountCode.objects.get(id=code.id).discount == Decimal("5.00")

    def test_duplicate_ignoring_case_conflicts(self, service, make_code):
        make_code(code="WELCOME")

        with pytest.raises(DiscountCodeAlreadyExists):
            service.create_code(
                CreateDiscountCodeDTO(code="welcome", discount=Decimal("1.00"), status="active")
            )

    def test_database_enforces_case_insensitive_uniqueness(self, make_code):
        make_code(code="WELCOME")

        with pytest.raises(IntegrityError), transaction.atomic():
            DiscountCode.objects.create(
                code="Welcome", discount=Decimal("1.00"), status=DiscountCodeStatus.ACTIVE
            )


class TestUpdateCode:
    def test_partial_update(self, service, make_code):
        code = make_code(code="SPRING", discount="5.00")

        updated = service.update_code(
            str(code.id), UpdateDiscountCodeDTO(status=DiscountCodeStatus.INACTIVE)
        )

        assert updated.status == DiscountCodeStatus.INACTIVE
        assert updated.discount == Decimal("5.00")

    def test_rename_to_taken_code_conflicts(self, service, make_code):
        make_code(code="SPRING")
        other = make_code(code="SUMMER")

        with pytest.raises(DiscountCodeAlreadyExists):
            service.update_code(str(other.id), UpdateDiscountCodeDTO(code="spring"))

    def test_changing_case_of_own_code_is_allowed(self, service, make_code):
        code = make_code(code="SPRING")

        updated = service.update_code(str(code.id), UpdateDiscountCodeDTO(code="Spring"))

        assert updated.code == "Spring"

    def test_unknown_code(self, service):
        with pytest.raises(DiscountCodeNotFound):
            service.update_code(str(uuid4()), UpdateDiscountCodeDTO(status="active"))


class TestVerifyCode:
    def test_active_code(self, service, make_code):
        make_code(code="SAVE10", discount="10.00")

        discount_code, resolved = service.verify_code("save10")

        assert discount_code.status == DiscountCodeStatus.ACTIVE
        assert resolved.amount == Decimal("10.00")

    def test_missing_code(self, service):
        with pytest.raises(InvalidRequest):
            service.verify_code("")

    def test_unknown_code_is_not_found(self, service):
        with pytest.raises(DiscountCodeNotFound):
            service.verify_code("GHOST")

    def test_inactive_code_is_invalid(self, service, make_code):
        make_code(code="PAUSED", status=DiscountCodeStatus.INACTIVE)

        with pytest.raises(InvalidDiscountCode):
            service.verify_code("PAUSED")
