"""Persistence helpers for authorship records."""

from .records import RecordError, dump_records, load_records

__all__ = ["RecordError", "dump_records", "load_records"]
