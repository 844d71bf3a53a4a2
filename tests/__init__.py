"""
Test suite for ulpcheck

Contains:
- tests/unit/          : Unit tests for individual modules
"""
