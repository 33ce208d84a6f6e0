import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from lms.domain.course_code import CourseCode
from lms.models import Course, Enrollment, User, UserRole
from lms.repositories import SqlAlchemyCourseCodeChecker
from lms.services.course_codes import CourseCodeGenerator
from lms.services.errors import ApplicationError, ConflictError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


def create_course(
    db: Session,
    teacher: User,
    title: str,
    description: Optional[str] = None,
    generator: Optional[CourseCodeGenerator] = None,
) -> Course:
    if teacher.role != UserRole.teacher:
        raise ForbiddenError("Only teachers can create courses")
    if not title or not title.strip():
        raise ApplicationError("Course title is required")

    generator = generator or CourseCodeGenerator(SqlAlchemyCourseCodeChecker(db))
    code = generator.generate()

    course = Course(teacher_id=teacher.id, code=code.value, title=title.strip(), description=description)
    db.add(course)
    db.commit()
    db.refresh(course)
    logger.info(f"Course {course.id} created by {teacher.id} with code {course.code}")
    return course


def list_courses(db: Session, user: User) -> List[Course]:
    if user.role == UserRole.teacher:
        return db.query(Course).filter(Course.teacher_id == user.id).order_by(Course.created_at).all()
    return (
        db.query(Course)
        .join(Enrollment, Enrollment.course_id == Course.id)
        .filter(Enrollment.student_id == user.id)
        .order_by(Course.created_at)
        .all()
    )


def get_owned_course(db: Session, course_id: str, teacher: User) -> Course:
    course = db.query(Course).filter(Course.id == course_id).first()
    if not course:
        raise NotFoundError("Course not found")
    if course.teacher_id != teacher.id:
        raise ForbiddenError("You do not have permission to modify this course")
    return course


def archive_course(db: Session, course_id: str, teacher: User) -> Course:
    course = get_owned_course(db, course_id, teacher)
    if course.archived:
        raise ConflictError("Course is already archived")
    course.archived = True
    db.commit()
    db.refresh(course)
    logger.info(f"Course {course.id} archived")
    return course


def enroll_student(db: Session, student: User, course_code: str) -> Enrollment:
    if student.role != UserRole.student:
        raise ForbiddenError("Only students can enroll in courses")

    code = CourseCode.create(course_code)
    course = db.query(Course).filter(Course.code == code.value).first()
    if not course:
        raise NotFoundError("Invalid course code")
    if course.archived:
        raise ConflictError("Cannot enroll in archived course")

    existing = (
        db.query(Enrollment)
        .filter(Enrollment.student_id == student.id, Enrollment.course_id == course.id)
        .first()
    )
    if existing:
        raise ConflictError("Student is already enrolled in this course")

    enrollment = Enrollment(student_id=student.id, course_id=course.id)
    db.add(enrollment)
    db.commit()
    db.refresh(enrollment)
    logger.info(f"Student {student.id} enrolled in course {course.id}")
    return enrollment
