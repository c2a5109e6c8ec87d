"""
Load sample categories and clothing items.

Usage:
    python manage.py seed_catalog

Running it twice does not create duplicates: rows are matched on name.
"""

import logging
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from catalog.models import Category, ClothingItem

logger = logging.getLogger(__name__)

CATEGORIES = [
    ("Traditional Moroccan", "Traditional Moroccan clothing items"),
    ("Modern Casual", "Modern casual wear"),
    ("Formal Wear", "Formal and business attire"),
    ("Sportswear", "Athletic and sport clothing"),
]

# (name, description, category, size, color, brand, price/day, deposit, condition)
ITEMS = [
    ("Caftan Luxe", "Elegant Moroccan caftan with intricate embroidery", "Traditional Moroccan", "M", "Red", "Marrakech Couture", "350.00", "1500.00", "excellent"),
    ("Jellaba Moderne", "Modern jellaba with contemporary design", "Traditional Moroccan", "L", "Navy Blue", "Casablanca Style", "200.00", "800.00", "good"),
    ("Takchita Fête", "Festive takchita for special occasions", "Traditional Moroccan", "S", "Gold", "Rabat Fashion", "450.00", "2000.00", "new"),
    ("Djellaba Simple", "Simple everyday djellaba", "Traditional Moroccan", "XL", "White", "Fez Traditional", "150.00", "600.00", "good"),
    ("Jean Moderne", "Stylish modern jeans", "Modern Casual", "M", "Blue", "Denim Co", "120.00", "400.00", "excellent"),
    ("T-Shirt Design", "Designer t-shirt with modern print", "Modern Casual", "L", "Black", "Urban Style", "80.00", "200.00", "good"),
    ("Hoodie Comfort", "Comfortable hoodie for casual wear", "Modern Casual", "S", "Gray", "Cozy Wear", "100.00", "300.00", "excellent"),
    ("Suit Business", "Professional business suit", "Formal Wear", "L", "Charcoal", "Executive Wear", "400.00", "2500.00", "excellent"),
    ("Dress Evening", "Elegant evening dress", "Formal Wear", "M", "Black", "Elegance", "350.00", "1800.00", "new"),
    ("Shirt Formal", "Classic formal shirt", "Formal Wear", "XL", "White", "Premium", "150.00", "500.00", "good"),
    ("Tracksuit Sport", "Comfortable tracksuit for exercise", "Sportswear", "M", "Blue", "SportPro", "180.00", "600.00", "excellent"),
    ("Jersey Team", "Team sports jersey", "Sportswear", "L", "Red", "TeamSport", "120.00", "400.00", "good"),
]


class Command(BaseCommand):
    help = "Create sample catalog categories and clothing items"

    @transaction.atomic
    def handle(self, *args, **options):
        categories = {}
        for name, description in CATEGORIES:
            categories[name], _ = Category.objects.get_or_create(
                name=name, defaults={"description": description}
            )

        created = 0
        for name, description, category, size, color, brand, price, deposit, condition in ITEMS:
            _, was_created = ClothingItem.objects.get_or_create(
                name=name,
                defaults={
                    "description": description,
                    "category": categories[category],
                    "size": size,
                    "color": color,
                    "brand": brand,
                    "price_per_day": Decimal(price),
                    "deposit_amount": Decimal(deposit),
                    "condition": condition,
                },
            )
            created += int(was_created)

        logger.info(
            "Catalog seeded",
            extra={"categories": len(categories), "items_created": created},
        )
        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded {len(categories)} categories and {created} new clothing items"
            )
        )
