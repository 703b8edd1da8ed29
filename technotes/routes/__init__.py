# Routes package init
"""
TechNotes Backend — API Routes Package
========================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - notes.py:   GET/POST/PATCH/DELETE  /notes
    - users.py:   GET/POST /users, PATCH/DELETE /users/{user_id}
    - health.py:  GET /health

Design Principle:
    Routes stay thin: parse the body, call the service, return its model.
    Business rules and failure reporting belong to the services.
"""
