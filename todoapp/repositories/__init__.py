"""Data access for todos.

This package defines the storage record and access-layer interface, the
domain-facing repository implementation, and the SQLite adapter under
:mod:`todoapp.repositories.sqlite`.
"""
