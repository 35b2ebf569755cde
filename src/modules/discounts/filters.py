import django_filters

from modules.discounts.models import DiscountCode, DiscountCodeStatus


class DiscountCodeFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=DiscountCodeStatus.choices)
    code = django_filters.CharFilter(field_name="code", lookup_expr="icontains")

    class Meta:
        model = DiscountCode
        fields = ["status", "code"]
