"""
Rentals Application - Rental lifecycle and pricing.

Modules:
    - pricing: Pure rental price computation (Decimal, half-up per line)
    - models: Rental (FSM: pending -> confirmed) and RentalItem
    - services: RentalService, the only writer of Rental rows
    - exceptions: Rental domain errors

HTTP endpoints for rentals are served through the payments orchestrator so
that every multi-entity write shares one transaction boundary.
"""
