from lms.db.init_db import DEMO_COURSE_CODE, seed_demo_data
from lms.models import Course, Quiz, User


def test_seed_demo_data_populates_empty_database(db_session):
    assert seed_demo_data(db_session) is True
    assert db_session.query(User).count() == 2
    course = db_session.query(Course).one()
    assert course.code == DEMO_COURSE_CODE
    assert db_session.query(Quiz).one().time_limit_minutes == 30


def test_seed_demo_data_is_idempotent(db_session):
    seed_demo_data(db_session)
    assert seed_demo_data(db_session) is False
    assert db_session.query(User).count() == 2
