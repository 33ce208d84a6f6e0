from sqlalchemy.orm import Session

from lms.domain.course_code import CourseCode
from lms.models import Course


class SqlAlchemyCourseCodeChecker:
    def __init__(self, db: Session):
        self.db = db

    def is_unique(self, code: CourseCode) -> bool:
        return self.db.query(Course.id).filter(Course.code == code.value).first() is None
