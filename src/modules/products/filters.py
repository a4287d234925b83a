import django_filters

from modules.products.models import Product, ProductStore


class ProductFilter(django_filters.FilterSet):
    id = django_filters.NumberFilter(field_name="id", lookup_expr="exact")
    description = django_filters.CharFilter(
        field_name="description", lookup_expr="icontains"
    )
    cost = django_filters.NumberFilter(field_name="cost", lookup_expr="exact")
    sale_price = django_filters.NumberFilter(method="filter_sale_price")

    class Meta:
        model = Product
        fields = ["id", "description", "cost", "sale_price"]

    def filter_sale_price(self, queryset, name, value):
        """Keep products having at least one price equal to ``value``."""
        matching = ProductStore.objects.filter(sale_price=value).values("product_id")
        return queryset.filter(id__in=matching)
