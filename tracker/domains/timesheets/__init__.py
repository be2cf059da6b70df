"""Timesheet guards: submission and validation."""
