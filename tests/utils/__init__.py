from tests.utils.cleanup import drop_all_tables

__all__ = ["drop_all_tables"]
