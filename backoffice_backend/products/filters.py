# products/filters.py

import django_filters
from django.db.models import Q

from products.models import Product


class ProductFilter(django_filters.FilterSet):
    """
    Query filters for the product list.

    ?category=<uuid>&brand=<uuid>&seller=<uuid>&publish=true&featured=true
    &stock_status=low_stock&min_price=10&max_price=99.99&q=<text>
    """

    category = django_filters.UUIDFilter(field_name="category_id")
    brand = django_filters.UUIDFilter(field_name="brand_id")
    seller = django_filters.UUIDFilter(field_name="seller_id")
    publish = django_filters.BooleanFilter(field_name="publish")
    featured = django_filters.BooleanFilter(field_name="is_featured")
    stock_status = django_filters.CharFilter(field_name="stock_status")
    min_price = django_filters.NumberFilter(field_name="unit_price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="unit_price", lookup_expr="lte")
    q = django_filters.CharFilter(method="filter_q")

    class Meta:
        model = Product
        fields = ["category", "brand", "seller", "publish", "featured", "stock_status"]

    def filter_q(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(name__icontains=value)
            | Q(sku__icontains=value)
            | Q(barcode__icontains=value)
            | Q(description__icontains=value)
        )
