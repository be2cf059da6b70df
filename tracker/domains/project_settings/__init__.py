"""Workflow settings: feature flags and approval authority per project."""
