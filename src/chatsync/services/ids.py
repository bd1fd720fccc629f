"""Opaque identifier generation."""

import uuid


def generate_id() -> str:
    """Return a short random identifier for entities and cache generations."""
    return uuid.uuid4().hex[:12]
