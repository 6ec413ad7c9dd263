"""Outfit recommendation logic and IO schemas."""
