"""Deliverable guards: review, sign-off and delivery criteria."""
