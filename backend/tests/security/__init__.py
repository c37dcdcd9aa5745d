"""
Security test suite for the Bookmarks API.

This module contains security-focused tests that validate:
- Authentication enforcement
- Authorization (IDOR prevention)

These tests should be run as part of CI/CD to prevent security regressions.
"""
