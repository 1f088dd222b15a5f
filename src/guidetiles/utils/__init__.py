"""Utility helpers for guidetiles."""
