"""Data acquisition: source adapters, HTTP transport and family aggregation."""
