"""Pytest configuration and fixtures."""
