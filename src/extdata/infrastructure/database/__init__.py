from extdata.infrastructure.database.ports import DatabaseAdapter, IDatabaseAdapter

__all__ = ["DatabaseAdapter", "IDatabaseAdapter"]
