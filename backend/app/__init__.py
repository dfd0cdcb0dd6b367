"""
Bookmarks Service: Application Package
=========================================

Layered layout:

    ┌─────────────────────────────────────┐
    │    Middleware (request ID, access   │
    │    log, bearer auth gate)           │
    ├─────────────────────────────────────┤
    │    Routes (API Layer)               │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │    Services (validation, queries,   │
    │    sanitization)                    │
    ├─────────────────────────────────────┤
    │    Models & Schemas (Data)          │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │    Database (Persistence)           │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
