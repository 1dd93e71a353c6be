"""
Courses API Endpoints
Handles course authoring, publication, approval and enrolment
"""
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from artverse.api.responses import success
from artverse.core.auth import TokenUser, require_admin, require_artist, require_buyer
from artverse.core.database import get_db
from artverse.domain.common import Pagination, offset_for
from artverse.domain.course import (
    COURSE_SORTS,
    CourseCreate,
    CourseUpdate,
    CourseView,
    LessonCreate,
    LessonView,
    RejectCourseRequest,
)
from artverse.services.course_service import CourseService

router = APIRouter()

SORT_PATTERN = f"^({'|'.join(COURSE_SORTS)})$"


def _view(course) -> dict:
    return CourseView.model_validate(course).to_dict()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_course(body: CourseCreate, user: TokenUser = Depends(require_artist), db: Session = Depends(get_db)):
    course = CourseService(db).create(user.id, body)
    return success(data=_view(course), message="Course created successfully")


@router.get("")
def list_courses(
    search: Optional[str] = Query(None, description="Search in title or description"),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    sort: str = Query("newest", pattern=SORT_PATTERN),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Published and approved courses only; popular sorts by student count"""
    courses, total = CourseService(db).list_public(
        search=search,
        min_price=min_price,
        max_price=max_price,
        sort=sort,
        limit=limit,
        offset=offset_for(page, limit),
    )
    return success(
        data=[_view(course) for course in courses],
        pagination=Pagination.build(total, page, limit).model_dump(),
    )


@router.get("/{course_id}")
def get_course(course_id: str, db: Session = Depends(get_db)):
    return success(data=_view(CourseService(db).get_public(course_id)))


@router.put("/{course_id}")
def update_course(
    course_id: str,
    body: CourseUpdate,
    user: TokenUser = Depends(require_artist),
    db: Session = Depends(get_db),
):
    course = CourseService(db).update(course_id, user.id, body)
    return success(data=_view(course), message="Course updated successfully, pending admin approval")


@router.post("/{course_id}/lessons", status_code=status.HTTP_201_CREATED)
def add_lesson(
    course_id: str,
    body: LessonCreate,
    user: TokenUser = Depends(require_artist),
    db: Session = Depends(get_db),
):
    course, lesson = CourseService(db).add_lesson(course_id, user.id, body)
    return success(
        data={"lesson": LessonView.model_validate(lesson).to_dict(), "lesson_count": len(course.lessons)},
        message="Lesson added successfully",
    )


@router.patch("/{course_id}/publish")
def publish_course(course_id: str, user: TokenUser = Depends(require_artist), db: Session = Depends(get_db)):
    course = CourseService(db).publish(course_id, user.id)
    return success(data=_view(course), message="Course published successfully, awaiting admin approval")


@router.patch("/{course_id}/approve")
def approve_course(course_id: str, user: TokenUser = Depends(require_admin), db: Session = Depends(get_db)):
    course = CourseService(db).approve(course_id)
    return success(data=_view(course), message="Course approved successfully")


@router.patch("/{course_id}/reject")
def reject_course(
    course_id: str,
    body: Optional[RejectCourseRequest] = None,
    user: TokenUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    course = CourseService(db).reject(course_id, body.reason if body else None)
    return success(data=_view(course), message="Course rejected successfully")


@router.post("/{course_id}/enroll")
def enroll(course_id: str, user: TokenUser = Depends(require_buyer), db: Session = Depends(get_db)):
    course = CourseService(db).enroll(course_id, user.id)
    return success(
        data={"course_id": course.id, "student_count": course.student_count},
        message="Enrolled in course successfully",
    )


@router.get("/{course_id}/enrollment")
def enrollment_status(course_id: str, user: TokenUser = Depends(require_buyer), db: Session = Depends(get_db)):
    return success(data={"is_enrolled": CourseService(db).is_enrolled(course_id, user.id)})
