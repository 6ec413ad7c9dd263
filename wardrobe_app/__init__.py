"""Wardrobe planner application bootstrap."""
