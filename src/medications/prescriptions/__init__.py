"""Prescription persistence helpers."""
