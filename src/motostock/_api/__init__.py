"""Endpoint modules for the stock sheet and webhooks."""
