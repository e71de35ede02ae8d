"""Endpoint functions for the catalog REST service."""
