from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class CourseCreate(BaseModel):
    title: str
    description: Optional[str] = None


class CourseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    code: str
    title: str
    description: Optional[str] = None
    archived: bool
    teacher_id: str


class EnrollRequest(BaseModel):
    course_code: str


class EnrollmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    course_id: str
    student_id: str
    enrolled_at: datetime
