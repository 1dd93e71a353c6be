"""
Repository Layer - Data Access

This layer holds all database queries and returns ORM rows.
Repositories wrap one SQLAlchemy session per request.
"""
from artverse.repositories.user_repository import UserRepository
from artverse.repositories.artwork_repository import ArtworkRepository
from artverse.repositories.course_repository import CourseRepository
from artverse.repositories.commission_repository import CommissionRepository
from artverse.repositories.order_repository import OrderRepository
from artverse.repositories.cart_repository import CartRepository, WishlistRepository
from artverse.repositories.notification_repository import NotificationRepository, ContactRepository

__all__ = [
    'UserRepository',
    'ArtworkRepository',
    'CourseRepository',
    'CommissionRepository',
    'OrderRepository',
    'CartRepository',
    'WishlistRepository',
    'NotificationRepository',
    'ContactRepository',
]
