"""
Video courses, their lessons and enrolments
"""
from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, JSON, Numeric, String,
    Table, Text,
)
from sqlalchemy.orm import relationship

from artverse.core.database import Base, one_of, utcnow
from artverse.core.ids import new_id

COURSE_STATUSES = ("draft", "published", "rejected")


course_enrollments = Table(
    "course_enrollments",
    Base.metadata,
    Column("course_id", String(36), ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("enrolled_at", DateTime(timezone=True), default=utcnow),
)


class Course(Base):
    """
    Course sold by an artist

    Public (listable, purchasable) only when status is published AND is_approved.
    thumbnail: {url, public_id, width, height}
    """
    __tablename__ = "courses"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_courses_price"),
        one_of("status", COURSE_STATUSES, "ck_courses_status"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    artist_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(12, 2), nullable=False, index=True)
    thumbnail = Column(JSON)

    status = Column(String(20), nullable=False, default="draft", index=True)
    is_approved = Column(Boolean, nullable=False, default=False)
    rejection_reason = Column(Text)

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    artist = relationship("User")
    lessons = relationship(
        "Lesson",
        back_populates="course",
        order_by="Lesson.position",
        cascade="all, delete-orphan",
    )
    students = relationship("User", secondary=course_enrollments)

    @property
    def is_public(self) -> bool:
        return self.status == "published" and bool(self.is_approved)

    @property
    def lesson_count(self) -> int:
        return len(self.lessons)

    @property
    def student_count(self) -> int:
        return len(self.students)

    def is_enrolled(self, user_id: str) -> bool:
        return any(student.id == user_id for student in self.students)


class Lesson(Base):
    """Lesson of a course (a video link plus optional resources)"""
    __tablename__ = "course_lessons"
    __table_args__ = (
        CheckConstraint("duration >= 1", name="ck_course_lessons_duration"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    course_id = Column(String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)

    title = Column(String(255), nullable=False)
    youtube_url = Column(String(500), nullable=False)
    duration = Column(Integer)
    resources = Column(JSON, nullable=False, default=list)

    course = relationship("Course", back_populates="lessons")
