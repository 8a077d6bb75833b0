"""
Test suite for take-toggle

Contains:
- tests/unit/          : Unit tests for individual modules
"""
