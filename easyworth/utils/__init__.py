"""Normalization and derived-value helpers."""
