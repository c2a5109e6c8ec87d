import django_filters as filters
from django.db.models import Q

from catalog.models import ClothingItem, ClothingItemStatus, ClothingSize


class ClothingItemFilter(filters.FilterSet):
    """Query-string filters of the item listing."""

    category_id = filters.NumberFilter(field_name="category_id")
    size = filters.ChoiceFilter(choices=ClothingSize.choices)
    status = filters.ChoiceFilter(choices=ClothingItemStatus.choices)
    search = filters.CharFilter(method="filter_search", max_length=255)

    class Meta:
        model = ClothingItem
        fields = ["category_id", "size", "status", "search"]

    def filter_search(self, queryset, name, value):
        # Case-insensitive match on name or description
        return queryset.filter(
            Q(name__icontains=value) | Q(description__icontains=value)
        )
