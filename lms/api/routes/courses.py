from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from lms.api.deps import get_db, get_current_user, get_current_teacher, get_current_student
from lms.models import User
from lms.schemas.course import CourseCreate, CourseOut, EnrollRequest, EnrollmentOut
from lms.services import courses

router = APIRouter()


@router.post("/courses", response_model=CourseOut, status_code=status.HTTP_201_CREATED)
def create_course(
    request: CourseCreate,
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
):
    return courses.create_course(db, current_teacher, request.title, request.description)


@router.get("/courses", response_model=list[CourseOut])
def list_courses(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return courses.list_courses(db, current_user)


@router.post("/courses/{course_id}/archive", response_model=CourseOut)
def archive_course(
    course_id: str,
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
):
    return courses.archive_course(db, course_id, current_teacher)


@router.post("/courses/enroll", response_model=EnrollmentOut, status_code=status.HTTP_201_CREATED)
def enroll(
    request: EnrollRequest,
    db: Session = Depends(get_db),
    current_student: User = Depends(get_current_student),
):
    return courses.enroll_student(db, current_student, request.course_code)
