"""Bookings - catering and event requests."""
