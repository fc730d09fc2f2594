"""Hashing utilities."""

import hashlib


def generate_title_id(date: str, title: str) -> str:
    """Generate a stable title ID from article date and title."""
    return hashlib.sha256(f"{date}:{title}".encode()).hexdigest()[:16]
