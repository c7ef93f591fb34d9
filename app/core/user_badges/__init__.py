"""Badges earned by users."""
