"""
Domain package for the Catalog Service.

This package contains the domain entities, the response schemas that gate
them, and the mappers between the two. The domain layer is independent of the
upstream API and of the HTTP framework.
"""
