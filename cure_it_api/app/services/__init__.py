"""
Service layer abstraction.

Each service encapsulates business logic for a domain and receives the
storage backend it works against at construction time, so API handlers
never touch persistence directly.
"""
