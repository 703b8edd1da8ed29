# Middleware package init
"""
TechNotes Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → Route Handler

    Request ID runs first so the logging middleware and the exception
    handlers can read the id from the ContextVar.
"""
