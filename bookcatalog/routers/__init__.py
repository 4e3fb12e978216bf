"""
API Routers Package

Router Structure:
- users.py: /users/* endpoints (registration, login, profile)
- books.py: /books/* endpoints
- reviews.py: /books/{book_id}/reviews and /books/reviews/* endpoints

Each router is imported and registered in main.py.
"""

from bookcatalog.routers.books import router as books_router
from bookcatalog.routers.reviews import router as reviews_router
from bookcatalog.routers.users import router as users_router

__all__ = [
    "books_router",
    "reviews_router",
    "users_router",
]
