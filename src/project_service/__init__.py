"""Project service - project lifecycle management with delegated access control.

This package provides the business layer for creating, reading, updating,
completing and soft-deleting project records, backed by PostgreSQL and an
external OAuth identity provider, and notifying the task service of
project-wide task changes.
"""

__version__ = "0.1.0"
