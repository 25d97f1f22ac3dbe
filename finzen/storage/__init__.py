from .stores import TransactionStore, GoalStore, TipStore, rows_to_records

__all__ = ["TransactionStore", "GoalStore", "TipStore", "rows_to_records"]
