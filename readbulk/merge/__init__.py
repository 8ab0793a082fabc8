"""
Merge heterogeneous tables into one table.

Public API:
    merge_tables(tables, column_mode) -> pyarrow.Table
        Concatenates tables whose column sets, column order and types differ.
        Supports three column modes: union (default), intersection, strict.

Internal modules (not exported):
    _columns: Column set resolution (union/intersection/strict)
    _types: Per-column type unification and casting
    _orchestrator: Alignment and concatenation

Architecture:
    merge_tables() runs a 3-phase process:
    1. Resolution: Decide the output column list (_columns.py)
    2. Typing: Pick one Arrow type per output column (_types.py)
    3. Construction: Align every table to the output schema, concatenate
       in input order (_orchestrator.py)
"""

from readbulk.merge._orchestrator import align_table, merge_tables

__all__ = ["align_table", "merge_tables"]
