"""
Core domain models, mathematical primitives, and contracts.

This module contains the fixed-point currency engine. It is independent
of external systems and performs no I/O beyond loading settings files.
"""
