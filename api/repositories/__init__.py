"""
Persistence adapters.

These modules encapsulate how the mock database is stored/retrieved (a single
JSON document on disk). Services depend on the store handle rather than
touching the JSON file.
"""
