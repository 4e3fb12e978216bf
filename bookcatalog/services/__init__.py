"""
Services Package

Business logic, kept out of the routers:
- security.py: Password hashing and bearer tokens
- users.py: Registration and authentication
- catalog.py: Book CRUD
- reviews.py: Review CRUD with ownership checks
- ratings.py: Book rating aggregates
- rate_limiter.py: slowapi rate limiting
"""
