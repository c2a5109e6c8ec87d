"""
Catalog Application - Clothing items and categories.

Read side of the clothing catalog. Rentals look items up by id to snapshot
their daily price and check availability; clients browse the public list.
Write access goes through the Django admin only.
"""
