"""
Core stream primitives, gate state, and configuration contracts.

This module contains the foundational building blocks the gate operator
is built on: a synchronous push-based stream runtime, per-subscription
gate state, and JSON Schema contracts.
"""
