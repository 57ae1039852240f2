"""
Pydantic schema definitions for API payloads.

Each domain (accounts, contacts, sessions, location, analytics) defines
its own Pydantic models for request and response bodies.  Field names
are snake case in Python and camelCase on the wire.
"""
