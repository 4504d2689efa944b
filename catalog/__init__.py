"""
Book catalog core.

Holds the book data model, the request validator, the in-memory record
store and the query engine that filters, sorts and paginates snapshots.
"""
