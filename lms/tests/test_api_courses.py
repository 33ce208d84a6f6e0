from fastapi import status


def test_teacher_creates_course_and_student_enrolls(client, teacher_headers, outsider_headers):
    response = client.post("/courses", json={"title": "Compilers"}, headers=teacher_headers)
    assert response.status_code == status.HTTP_201_CREATED
    code = response.json()["code"]
    assert len(code) == 6

    response = client.post("/courses/enroll", json={"course_code": code}, headers=outsider_headers)
    assert response.status_code == status.HTTP_201_CREATED

    response = client.post("/courses/enroll", json={"course_code": code}, headers=outsider_headers)
    assert response.status_code == status.HTTP_409_CONFLICT

    response = client.get("/courses", headers=outsider_headers)
    assert [course["code"] for course in response.json()] == [code]


def test_student_cannot_create_course(client, student_headers):
    response = client.post("/courses", json={"title": "Nope"}, headers=student_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_enroll_with_malformed_code(client, outsider_headers):
    response = client.post("/courses/enroll", json={"course_code": "AB-1"}, headers=outsider_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "Invalid course code format" in response.json()["detail"]


def test_enroll_in_archived_course(client, teacher_headers, outsider_headers, seed_data):
    response = client.post(f"/courses/{seed_data['course'].id}/archive", headers=teacher_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["archived"] is True

    response = client.post("/courses/enroll", json={"course_code": "ABC123"}, headers=outsider_headers)
    assert response.status_code == status.HTTP_409_CONFLICT
