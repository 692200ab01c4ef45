"""
Test suite for currency_core

Contains:
- tests/unit/          : Unit tests for individual modules
"""
