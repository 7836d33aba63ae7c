"""Versioned API endpoint modules, one router per domain."""
