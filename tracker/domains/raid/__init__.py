"""RAID log permission facade."""
