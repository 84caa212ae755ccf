"""Outdoor vertical — multi-brand gear rental, retail and laundry.

Brings the patterns together in one domain:
- Hostname to brand resolution with admin domain bindings
- Data service over hosted REST, SQL or in-memory stores
- In-process state with optimistic updates
- Pure-function rules engine for checkout and bookings
- Laundry and rental workflow state machines
- Storefront and back-office routers, AI insights advisor
"""
