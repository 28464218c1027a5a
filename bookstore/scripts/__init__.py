"""Operational scripts run with `python -m bookstore.scripts.<name>`."""
