"""Caller access summary for a project."""
