"""Core application components.

This module provides the foundational components for the Project Tracker API:
- Application settings and configuration
- Context provider contracts for identity, membership, roles and settings
- The process-wide provider registry used by request dependencies
"""
