"""Customer API views.

Exposes the ``CustomerService`` via HTTP using a DRF ViewSet.  Domain
exceptions propagate to ``api_exception_handler``.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.customers.models import Customer
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.serializers import (
    CustomerBalanceSerializer,
    CustomerSearchResultSerializer,
)
from modules.customers.services import CustomerService


class CustomerViewSet(GenericViewSet):
    """Balance look-up and name search for customers.

    Uses ``CustomerService`` with ``CustomerDjangoRepository`` (DIP).
    """

    queryset = Customer.objects.all()
    serializer_class = CustomerBalanceSerializer
    pagination_class = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=CustomerDjangoRepository())

    @action(detail=True, methods=["get"], url_path="balance")
    def balance(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/balance/"""
        customer = self._service.get_customer(pk)
        return Response(CustomerBalanceSerializer(customer).data)

    @extend_schema(
        parameters=[OpenApiParameter("term", str, required=True)],
        responses=CustomerSearchResultSerializer(many=True),
    )
    @action(detail=False, methods=["get"], url_path="search")
    def search(self, request: Request) -> Response:
        """GET /api/v1/customers/search/?term=..."""
        customers = self._service.search_customers(request.query_params.get("term"))
        return Response(CustomerSearchResultSerializer(customers, many=True).data)
