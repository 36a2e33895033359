"""
Storage layer for extdata.

Two PostgreSQL tables, one per record family, each with a (time, source)
primary key. Writes are per-record and idempotent: a re-inserted natural key
is reported as a duplicate rather than an error, so overlapping collection
windows are always safe to persist.
"""
