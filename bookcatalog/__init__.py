"""
Book Catalog API Package

A REST backend for cataloging books and collecting reader reviews.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy database connection and session management
- exceptions.py: Domain errors and their HTTP status codes
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions (sessions, current user)
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Business logic (credentials, tokens, catalog, reviews, ratings)
"""

__version__ = "0.1.0"
