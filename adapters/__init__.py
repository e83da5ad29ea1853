"""Adapters for services outside the ledger engine."""
