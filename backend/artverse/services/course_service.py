"""
Course Service
Course authoring, publication, admin approval and enrolment

Lifecycle:
    draft -> published (owner, needs at least one lesson)
    published -> approved flag set (admin)
    any -> rejected (admin)
    any edit by the owner -> draft, approval cleared
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from artverse.core.errors import BadRequestError, ForbiddenError, NotFoundError
from artverse.core.ids import ensure_valid_id
from artverse.domain.course import CourseCreate, CourseUpdate, LessonCreate
from artverse.models import Course, Lesson, User
from artverse.repositories import CourseRepository
from artverse.services import storage_service
from artverse.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


class CourseService:
    def __init__(self, db: Session):
        self.db = db
        self.courses = CourseRepository(db)
        self.notifications = NotificationService(db)

    def create(self, artist_id: str, request: CourseCreate) -> Course:
        course = self.courses.create(
            artist_id,
            title=request.title,
            description=request.description,
            price=request.price,
            thumbnail=request.thumbnail.model_dump(mode="json"),
        )
        self.db.commit()
        logger.info(f"Course {course.id} created by artist {artist_id}")
        return course

    def update(self, course_id, artist_id: str, request: CourseUpdate) -> Course:
        course = self._require_owned(course_id, artist_id, "Unauthorized to update this course")

        replaced_thumbnail = None
        if request.title is not None:
            course.title = request.title
        if request.description is not None:
            course.description = request.description
        if request.price is not None:
            course.price = request.price
        if request.thumbnail is not None:
            previous = (course.thumbnail or {}).get("public_id")
            if previous and previous != request.thumbnail.public_id:
                replaced_thumbnail = previous
            course.thumbnail = request.thumbnail.model_dump(mode="json")

        course.status = "draft"
        course.is_approved = False
        course.rejection_reason = None
        self.db.commit()
        logger.info(f"Course {course.id} updated, back to draft")

        if replaced_thumbnail:
            storage_service.delete_images([replaced_thumbnail])
        return course

    def list_public(self, **filters) -> Tuple[List[Course], int]:
        return self.courses.find_public(**filters)

    def get_public(self, course_id) -> Course:
        course = self.courses.find_public_by_id(ensure_valid_id(course_id, "course"))
        if not course:
            raise NotFoundError("Course not found or not approved")
        return course

    def add_lesson(self, course_id, artist_id: str, request: LessonCreate) -> Tuple[Course, Lesson]:
        course = self._require_owned(course_id, artist_id, "Unauthorized to modify this course")
        lesson = self.courses.add_lesson(course, **request.model_dump(mode="json"))
        self.db.commit()
        return course, lesson

    def publish(self, course_id, artist_id: str) -> Course:
        course = self._require_owned(course_id, artist_id, "Unauthorized to publish this course")
        if not course.lessons:
            raise BadRequestError("Course must have at least one lesson to publish")

        course.status = "published"
        self.db.commit()
        logger.info(f"Course {course.id} published, awaiting approval")

        self.notifications.notify_admins_safely(
            "course_approval",
            f"New course \"{course.title}\" needs approval",
            {"course_id": course.id},
        )
        return course

    def approve(self, course_id) -> Course:
        course = self._require(course_id)
        if course.status != "published":
            raise BadRequestError("Only published courses can be approved")

        course.is_approved = True
        course.rejection_reason = None
        self.db.commit()
        logger.info(f"Course {course.id} approved")

        self.notifications.notify_safely(
            course.artist_id, "course_approved",
            f"Your course \"{course.title}\" has been approved",
            {"course_id": course.id},
        )
        return course

    def reject(self, course_id, reason: Optional[str]) -> Course:
        if not reason or not reason.strip():
            raise BadRequestError("Rejection reason is required")

        course = self._require(course_id)
        course.status = "rejected"
        course.is_approved = False
        course.rejection_reason = reason.strip()
        self.db.commit()
        logger.info(f"Course {course.id} rejected")

        self.notifications.notify_safely(
            course.artist_id, "course_rejected",
            f"Your course \"{course.title}\" was rejected. Reason: {course.rejection_reason}",
            {"course_id": course.id, "reason": course.rejection_reason},
        )
        return course

    def enroll(self, course_id, buyer_id: str) -> Course:
        course = self.get_public(course_id)
        buyer = self.db.get(User, buyer_id)
        if not self.courses.enroll(course, buyer):
            raise BadRequestError("You are already enrolled in this course")
        self.db.commit()
        logger.info(f"User {buyer_id} enrolled in course {course.id}")

        self.notifications.notify_safely(
            course.artist_id, "new_enrollment",
            f"New enrollment in your course \"{course.title}\"",
            {"course_id": course.id, "student_id": buyer_id},
        )
        return course

    def is_enrolled(self, course_id, user_id: str) -> bool:
        course = self._require(course_id)
        return course.is_enrolled(user_id)

    def _require(self, course_id) -> Course:
        course = self.courses.find_by_id(ensure_valid_id(course_id, "course"))
        if not course:
            raise NotFoundError("Course not found")
        return course

    def _require_owned(self, course_id, artist_id: str, message: str) -> Course:
        course = self._require(course_id)
        if course.artist_id != artist_id:
            raise ForbiddenError(message)
        return course
