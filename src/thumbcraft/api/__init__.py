"""Thumbcraft - FastAPI REST API layer.

This package contains the FastAPI application, Pydantic request/response
models, and the in-memory record store.

Modules
-------
main
    ``create_app()`` factory, route handlers and the ``main()`` CLI entry
    point.
models
    Pydantic models for API request and response validation.
store
    Process-lifetime storage for generation records and daily usage.
"""
