"""Supabase module for reading matches and subscriptions through PostgREST."""

from .client import SupabaseRestClient, build_or_filter

__all__ = [
    "SupabaseRestClient",
    "build_or_filter",
]
