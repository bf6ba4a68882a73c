"""
Test suite for timer-stats

Contains:
- tests/unit/  : Unit tests for the sample collection, summaries and reporter
"""
