"""Cross-cutting infrastructure: database, logging, clock."""
