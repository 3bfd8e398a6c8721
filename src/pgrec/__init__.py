"""
pgrec - PostgreSQL server-parameter recommendation calculator.

Computes tuning recommendations for memory, parallelism, JIT and
connection settings from hardware facts and renders them as
ALTER SYSTEM statements or postgresql.conf fragments.
"""

__version__ = "1.0.0"
__author__ = "pgrec Team"
