"""Product API views.

Exposes the ``ProductService`` via HTTP using DRF ViewSets.  Domain
exceptions propagate to ``api_exception_handler``; the view never
builds error responses itself.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.products.dtos import UpdateProductDTO
from modules.products.filters import ProductFilter
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import (
    ProductSearchResultSerializer,
    ProductSerializer,
    ProductUpdateSerializer,
)
from modules.products.services import ProductService


class ProductViewSet(ListModelMixin, GenericViewSet):
    """List, search and partially update products.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``: products are not created or
    deleted through the API.
    """

    filterset_class = ProductFilter
    ordering_fields = ["name", "price", "stock", "created_at"]
    ordering = ["name", "id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    queryset = Product.objects.all()
    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    def get_queryset(self):
        return self._service.list_products()

    @extend_schema(
        parameters=[OpenApiParameter("term", str, required=True)],
        responses=ProductSearchResultSerializer(many=True),
    )
    @action(detail=False, methods=["get"], url_path="search", pagination_class=None)
    def search(self, request: Request) -> Response:
        """GET /api/v1/products/search/?term=..."""
        products = self._service.search_products(request.query_params.get("term"))
        return Response(ProductSearchResultSerializer(products, many=True).data)

    @extend_schema(request=ProductUpdateSerializer, responses=ProductSerializer)
    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/"""
        serializer = ProductUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        dto = UpdateProductDTO(**serializer.validated_data)
        product = self._service.update_product(pk, dto)
        return Response(ProductSerializer(product).data)
