"""
Service layer abstraction.

``EventCatalog`` encapsulates the query and registration logic.  It
reads records through an ``EventProvider`` so the built‑in sample data
can be swapped for a real data source without changing API handlers.
"""
