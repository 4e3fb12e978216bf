"""
Test Suite for Book Catalog API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_users.py: Registration, login and /users/me
- test_security.py: Password hashing and bearer tokens
- test_books.py: /books endpoints
- test_reviews.py: Review endpoints and ownership rules
- test_ratings.py: Average rating consistency
- test_main.py: Health, root and error rendering
- test_rate_limiter.py: Client identification for rate limits

Running Tests:
    pytest
    pytest tests/test_reviews.py -v
"""
