"""Adapters: in-memory implementations of the scheduler ports."""
