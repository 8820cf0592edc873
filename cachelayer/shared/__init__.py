"""Shared: telemetry helpers used across layers."""
