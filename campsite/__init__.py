"""Campsite reservations service."""
