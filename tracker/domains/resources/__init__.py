"""Resource permission facade: field visibility and default selection."""
