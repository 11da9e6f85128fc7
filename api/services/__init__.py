"""
High-level use cases for the mock API.

Service modules orchestrate the store handle to implement the REST rules
(list, get, create, replace, merge, delete).

Routers (FastAPI endpoints) call these services instead of manipulating
the JSON document directly.
"""
