"""Catalog view model: normalization, filtering, change summaries and anatomy."""
