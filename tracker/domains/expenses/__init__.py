"""Expense guards: submission, validation and chargeable routing."""
