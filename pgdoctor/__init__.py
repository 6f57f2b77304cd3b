"""pgdoctor: PostgreSQL health checker."""

__version__ = "0.1.0"
