"""
Course Repository - Data Access Layer for Courses, Lessons and Enrolments
"""
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, joinedload, selectinload

from artverse.models import Course, Lesson, User, course_enrollments


class CourseRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, course_id: str) -> Optional[Course]:
        return (
            self.db.query(Course)
            .options(joinedload(Course.artist), selectinload(Course.lessons))
            .filter(Course.id == course_id)
            .first()
        )

    def find_public_by_id(self, course_id: str) -> Optional[Course]:
        course = self.find_by_id(course_id)
        if course and course.is_public:
            return course
        return None

    def find_public(
        self,
        search: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        sort: str = "newest",
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Course], int]:
        """
        Published and approved courses

        Returns:
            Tuple of (list of courses, total count)
        """
        query = self.db.query(Course).filter(Course.status == "published", Course.is_approved.is_(True))

        if search:
            term = f"%{search.strip()}%"
            query = query.filter(or_(Course.title.ilike(term), Course.description.ilike(term)))
        if min_price is not None:
            query = query.filter(Course.price >= min_price)
        if max_price is not None:
            query = query.filter(Course.price <= max_price)

        total = query.count()

        if sort == "popular":
            students = (
                select(func.count(course_enrollments.c.user_id))
                .where(course_enrollments.c.course_id == Course.id)
                .correlate(Course)
                .scalar_subquery()
            )
            order = (students.desc(), Course.created_at.desc())
        else:
            order = {
                "oldest": (Course.created_at.asc(),),
                "price-high": (Course.price.desc(),),
                "price-low": (Course.price.asc(),),
            }.get(sort, (Course.created_at.desc(),))

        rows = (
            query.options(joinedload(Course.artist), selectinload(Course.lessons), selectinload(Course.students))
            .order_by(*order)
            .offset(offset)
            .limit(limit)
            .all()
        )
        return rows, total

    def find_by_artist(self, artist_id: str) -> List[Course]:
        return (
            self.db.query(Course)
            .options(selectinload(Course.lessons), selectinload(Course.students))
            .filter(Course.artist_id == artist_id)
            .order_by(Course.created_at.desc())
            .all()
        )

    def create(self, artist_id: str, **fields) -> Course:
        course = Course(artist_id=artist_id, status="draft", is_approved=False, **fields)
        self.db.add(course)
        self.db.flush()
        return course

    def add_lesson(self, course: Course, **fields) -> Lesson:
        lesson = Lesson(position=len(course.lessons), **fields)
        course.lessons.append(lesson)
        self.db.flush()
        return lesson

    def enroll(self, course: Course, user: User) -> bool:
        """Add the user to the course students. Returns False when already enrolled."""
        if course.is_enrolled(user.id):
            return False
        course.students.append(user)
        self.db.flush()
        return True
