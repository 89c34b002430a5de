"""Versioned HTTP API."""
