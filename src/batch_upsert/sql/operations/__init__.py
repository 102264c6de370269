"""Statement-building operations: missing-key policy, planning, upsert."""
