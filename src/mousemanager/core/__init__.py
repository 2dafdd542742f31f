"""Dispatch core: callback tables, registry, hit resolution and state machine."""
