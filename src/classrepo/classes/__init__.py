"""Class discovery helpers."""
