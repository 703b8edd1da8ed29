"""
TechNotes Backend — Application Package
=========================================

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Guard checks, uniqueness, hashing
    ├─────────────────────────────────────┤
    │     Repositories (Persistence)      │  ← Lean / hydrated reads, writes
    ├─────────────────────────────────────┤
    │    Models & Schemas (Data)          │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Sessions)          │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
