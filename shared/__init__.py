"""
Shared utilities for the admin console.

This package contains functionality used by both the API client and the
console gateway:
- logging_config: one logging setup for every entry point
"""
