"""
Order domain services.

- pricing          pure Decimal price/total calculator
- order_service    cart -> order transaction, order reads
- order_lifecycle  status workflow + cancellation restock
- recommendations  purchase-history recommendations
"""
