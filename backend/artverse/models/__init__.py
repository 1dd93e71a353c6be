"""
Database models
"""
from .user import User, USER_ROLES
from .artwork import Artwork, ARTWORK_CATEGORIES, ARTWORK_STATUSES, REJECTION_REASONS
from .course import Course, Lesson, course_enrollments, COURSE_STATUSES
from .commission import Commission, CommissionMessage, COMMISSION_STATUSES, PAYMENT_STATUSES
from .order import Order, OrderItem, ORDER_STATUSES, PAYOUT_STATUSES, ITEM_TYPES
from .cart import Cart, CartItem, Wishlist, WishlistItem
from .notification import Notification, ContactMessage, NOTIFICATION_TYPES

__all__ = [
    "User",
    "Artwork",
    "Course",
    "Lesson",
    "course_enrollments",
    "Commission",
    "CommissionMessage",
    "Order",
    "OrderItem",
    "Cart",
    "CartItem",
    "Wishlist",
    "WishlistItem",
    "Notification",
    "ContactMessage",
    "USER_ROLES",
    "ARTWORK_CATEGORIES",
    "ARTWORK_STATUSES",
    "REJECTION_REASONS",
    "COURSE_STATUSES",
    "COMMISSION_STATUSES",
    "PAYMENT_STATUSES",
    "ORDER_STATUSES",
    "PAYOUT_STATUSES",
    "ITEM_TYPES",
    "NOTIFICATION_TYPES",
]
