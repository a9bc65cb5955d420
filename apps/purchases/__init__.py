"""
Purchases App - Dish Purchases and Settlement

Buyers pay for menu items from their cash balance; every purchased unit is
recorded in the buyer's purchase history and credited to the restaurant.

Architecture:
- Models: PurchaseHistory
- Services: PurchaseService
- Views: create purchase / list history
- Exceptions: Domain exception hierarchy
"""
