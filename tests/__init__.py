"""
docguard test suite.

This package contains tests for the docguard access-control pipeline:
- Attribute filters and authorizers
- AccessController defaults
- Resource pipelines
- Policies, stores, identifiers and validation
"""
