"""Booking Lanes: reservation calendar layout service."""
