"""Project Tracker API: authorization and approval-routing engine."""
