"""Dialect operators for vertica_adapter."""
