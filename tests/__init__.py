"""
PrivacyX SDK Test Suite
=======================

Test organization:
- tests/unit/          - Unit tests (in-memory chain, no node required)

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
    pytest --cov=privacyx           # With coverage
"""
