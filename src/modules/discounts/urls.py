"""Discount code URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.discounts.views import DiscountCodeViewSet

router = DefaultRouter(trailing_slash=True)
router.register("codes", DiscountCodeViewSet, basename="discount-code")

urlpatterns = router.urls
