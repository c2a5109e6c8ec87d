"""
Payments app for rental settlement.

This app handles:
- Cash payments (pending until staff confirm the cash was received)
- Card payments authorized upstream (recorded as paid)
- Payments settled outside the system (recorded as paid)
- The payment projection on each rental (method, status, reference)

Related apps:
    - rentals: Rental model and RentalService
    - catalog: Clothing items referenced by rental lines

Usage:
    from payments.services import RentalOrchestrator

    result = RentalOrchestrator.confirm_cash_payment(
        actor=request.user,
        rental_id=rental.id,
        amount_received=Decimal("500.00"),
    )
"""
