"""Utility modules."""

from autoorganize.utils.hash import path_id
from autoorganize.utils.result_store import ResultStore

__all__ = ["path_id", "ResultStore"]
