import django_filters

from modules.products.models import Product


class ProductFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    min_price = django_filters.NumberFilter(field_name="sale_price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="sale_price", lookup_expr="lte")
    in_stock = django_filters.BooleanFilter(method="filter_in_stock")
    is_visible = django_filters.BooleanFilter(field_name="is_visible")

    class Meta:
        model = Product
        fields = ["search", "min_price", "max_price", "in_stock", "is_visible"]

    def filter_in_stock(self, queryset, name, value):
        if value is None:
            return queryset
        return queryset.filter(stock__gt=0) if value else queryset.filter(stock=0)
