"""Shared utilities for the native driver."""
