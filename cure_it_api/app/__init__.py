"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each domain (authentication, emergency contacts,
administration, location) exposes a router defined in
``api/v1/endpoints``; business logic lives in ``services`` and the
pluggable persistence layer in ``storage``.  The ASGI application is
``cure_it_api.app.main:app``.
"""
