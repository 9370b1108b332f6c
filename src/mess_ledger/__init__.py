"""Shared-household meal and expense ledger."""
