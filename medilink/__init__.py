"""MediLink gateway: scheduling, booking and push notifications in front of the MediLink API."""
