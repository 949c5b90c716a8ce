"""
Business services for Camper Calendar.

- availability.py: definitive-booking conflict detection
- bookings.py: booking create/update/delete, listing and reset
- reactions.py / comments.py: feedback attached to a booking
- photos.py: photo uploads, best-effort deletion and the album listing
"""

__all__: list[str] = []
