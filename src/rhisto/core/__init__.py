"""Histogram construction and error kinds."""
