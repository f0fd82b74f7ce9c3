"""Metacritic adapter."""

from __future__ import annotations

from .client import MetacriticClient, guess_slug, parse_score

__all__ = ["MetacriticClient", "guess_slug", "parse_score"]
