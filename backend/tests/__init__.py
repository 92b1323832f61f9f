"""
Tests package for the temp file registry.

This package contains test suites organized by type:
- unit/: Fast tests of single components
- integration/: Tests through the full Flask application
- property/: Hypothesis property-based tests
"""
