"""Shared building blocks: service error base and blob storage."""
