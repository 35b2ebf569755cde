"""Discount code API views."""

from __future__ import annotations

from django.conf import settings
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.discounts.dtos import CreateDiscountCodeDTO, UpdateDiscountCodeDTO
from modules.discounts.filters import DiscountCodeFilter
from modules.discounts.models import DiscountCode
from modules.discounts.repositories.django_repository import DiscountCodeDjangoRepository
from modules.discounts.serializers import (
    DiscountCodeCreateSerializer,
    DiscountCodeSerializer,
    DiscountCodeUpdateSerializer,
    DiscountCodeVerificationSerializer,
)
from modules.discounts.services import DiscountCodeService
from modules.discounts.validator import DiscountValidator


class DiscountCodeViewSet(ListModelMixin, GenericViewSet):
    """List, verify, create and partially update discount codes."""

    filterset_class = DiscountCodeFilter
    ordering_fields = ["code", "discount", "created_at"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    queryset = DiscountCode.objects.all()
    serializer_class = DiscountCodeSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        repository = DiscountCodeDjangoRepository()
        validator = DiscountValidator(
            repository,
            enforce_expiry=settings.ORDER_WORKFLOW["ENFORCE_CODE_EXPIRY"],
        )
        self._service = DiscountCodeService(repository=repository, validator=validator)

    def get_queryset(self):
        return self._service.list_codes()

    @extend_schema(
        parameters=[OpenApiParameter("code", str, required=True)],
        responses=DiscountCodeVerificationSerializer,
    )
    @action(detail=False, methods=["get"], url_path="verify", pagination_class=None)
    def verify(self, request: Request) -> Response:
        """GET /api/v1/codes/verify/?code=..."""
        discount_code, resolved = self._service.verify_code(
            request.query_params.get("code")
        )
        data = {
            "code": resolved.code,
            "discount": resolved.amount,
            "status": discount_code.status,
        }
        return Response(DiscountCodeVerificationSerializer(data).data)

    @extend_schema(request=DiscountCodeCreateSerializer, responses={201: DiscountCodeSerializer})
    def create(self, request: Request) -> Response:
        """POST /api/v1/codes/"""
        serializer = DiscountCodeCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        dto = CreateDiscountCodeDTO(**serializer.validated_data)
        discount_code = self._service.create_code(dto)
        return Response(
            DiscountCodeSerializer(discount_code).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=DiscountCodeUpdateSerializer, responses=DiscountCodeSerializer)
    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/codes/{pk}/"""
        serializer = DiscountCodeUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        dto = UpdateDiscountCodeDTO(**serializer.validated_data)
        discount_code = self._service.update_code(pk, dto)
        return Response(DiscountCodeSerializer(discount_code).data)
