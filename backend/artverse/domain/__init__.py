"""
Domain Layer - Request bodies and views

Pydantic models validating incoming JSON and shaping outgoing JSON.
Views are built from ORM rows with model_validate (from_attributes).
"""
from artverse.domain.common import DomainModel, ImageData, UserSummary, BuyerSummary, Pagination
from artverse.domain.user import UserView, RegisterRequest, LoginRequest, ProfileUpdateRequest
from artverse.domain.artwork import ArtworkView, ArtworkCreate, ArtworkUpdate
from artverse.domain.course import CourseView, LessonView, CourseCreate, CourseUpdate, LessonCreate
from artverse.domain.commission import CommissionView, MessageView, CommissionCreate
from artverse.domain.order import OrderView, OrderItemView, OrderCreate
from artverse.domain.cart import CartItemView, WishlistItemView
from artverse.domain.notification import NotificationView

__all__ = [
    'DomainModel', 'ImageData', 'UserSummary', 'BuyerSummary', 'Pagination',
    'UserView', 'RegisterRequest', 'LoginRequest', 'ProfileUpdateRequest',
    'ArtworkView', 'ArtworkCreate', 'ArtworkUpdate',
    'CourseView', 'LessonView', 'CourseCreate', 'CourseUpdate', 'LessonCreate',
    'CommissionView', 'MessageView', 'CommissionCreate',
    'OrderView', 'OrderItemView', 'OrderCreate',
    'CartItemView', 'WishlistItemView',
    'NotificationView',
]
