"""Extraction, normalization and formatting pipeline."""
