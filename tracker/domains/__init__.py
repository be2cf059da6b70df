"""Business domains.

Each domain pairs its record types with the object-aware guards that decide
what an actor may do with a record, plus a thin router exposing them:
- project_settings: workflow settings resolver (features, approval authority)
- expenses, timesheets, deliverables: approvable records
- raid, resources: entity-specific permission facades
- access: the caller's resolved permissions for a project
"""
