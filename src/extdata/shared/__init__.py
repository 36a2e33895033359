"""Shared domain models and enums."""
