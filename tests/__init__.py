"""
Test suite for checked-int

Contains:
- tests/unit/          : Unit and property-based tests for individual modules
"""
