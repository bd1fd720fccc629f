"""Simulated backend services."""
