# Services package init
"""
TechNotes Backend — Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and repositories (persistence).
Why:   Routes handle HTTP; services own the business rules.
How:   Services receive their repositories through the constructor and raise
       application exceptions; they never build HTTP responses.

Service Inventory:
    - NoteService: Notes handler set (list, create, update, delete)
    - UserService: Users handler set (list, create, update, delete)
"""
