"""Utility modules for registry-keychain."""
