"""
Pydantic schema definitions for event records and API payloads.
"""
