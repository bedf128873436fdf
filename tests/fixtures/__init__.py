"""Shared test fixtures for ncsafe."""
