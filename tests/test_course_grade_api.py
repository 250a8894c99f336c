import pytest

from models.grade_bands import GradeBand as GradeBandModel
from models.grade_components import GradeComponent as GradeComponentModel

COMPONENTS = [
    {"name": "Assignments", "type": "Assignment", "weight": 60, "is_mandatory": True},
    {"name": "Final exam", "type": "Exam", "weight": 40, "is_mandatory": True},
]
BANDS = [
    {"min_score": 0, "max_score": 59, "grade_value": 0, "grade_letter": "F"},
    {"min_score": 60, "max_score": 69, "grade_value": 1, "grade_letter": "C"},
    {"min_score": 70, "max_score": 100, "grade_value": 2, "grade_letter": "A"},
]


def create_user(client, username, role="student", last_name="Kim"):
    res = client.post("/v1/users/", json={
        "username": username,
        "email": f"{username}@example.com",
        "password": "secret",
        "first_name": username.title(),
        "last_name": last_name,
        "role": role,
    })
    assert res.json()["success"] is True
    return res.json()["data"]["id"]


def create_course(client, components=COMPONENTS, bands=BANDS, **extra):
    professor_id = create_user(client, f"prof{len(components)}{len(bands)}", role="professor")
    payload = {
        "code": "CS101",
        "name": "Intro to Programming",
        "professor_id": professor_id,
        "grade_components": components,
        "grade_bands": bands,
        **extra,
    }
    res = client.post("/v1/courses/", json=payload)
    assert res.json()["success"] is True
    return res.json()


def create_assignment(client, course_id, type, max_score=100):
    res = client.post("/v1/assignments/", json={
        "course_id": course_id, "title": f"{type} 1", "type": type, "max_score": max_score,
    })
    return res.json()["data"]["id"]


def record_grade(client, student_id, assignment_id, score, graded=True):
    res = client.post("/v1/grades/", json={
        "student_id": student_id, "assignment_id": assignment_id, "score": score, "is_graded": graded,
    })
    assert res.json()["success"] is True
    return res.json()["data"]


@pytest.fixture
def course_setup(client):
    course_id = create_course(client)["data"]["id"]
    student_id = create_user(client, "minji")
    client.post("/v1/enrollments/", json={"student_id": student_id, "course_id": course_id})
    homework = create_assignment(client, course_id, "assignment")
    exam = create_assignment(client, course_id, "exam")
    return {"course_id": course_id, "student_id": student_id, "homework": homework, "exam": exam}


# ==========================================================
# 최종 성적 조회
# ==========================================================

def test_student_course_grade(client, course_setup):
    s = course_setup
    record_grade(client, s["student_id"], s["homework"], 80)
    record_grade(client, s["student_id"], s["exam"], 70)

    res = client.get(f"/v1/courses/{s['course_id']}/students/{s['student_id']}/grade")

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["final_percentage"] == 76.0
    assert data["grade_value"] == 2
    assert data["band"]["grade_letter"] == "A"
    assert data["passing_status"] == "passing"
    assert [c["name"] for c in data["components"]] == ["Assignments", "Final exam"]
    assert data["warnings"] == []


def test_ungraded_mandatory_component_returns_409(client, course_setup):
    s = course_setup
    record_grade(client, s["student_id"], s["homework"], 80)
    record_grade(client, s["student_id"], s["exam"], 70, graded=False)

    res = client.get(f"/v1/courses/{s['course_id']}/students/{s['student_id']}/grade")

    assert res.status_code == 409
    error = res.json()["error"]
    assert error["code"] == "INCOMPLETE_GRADING"
    assert error["details"]["components"] == ["Final exam"]


def test_grading_after_feedback_update_counts(client, course_setup):
    s = course_setup
    record_grade(client, s["student_id"], s["homework"], 80)
    pending = record_grade(client, s["student_id"], s["exam"], 0, graded=False)

    client.put(f"/v1/grades/{pending['id']}", json={"score": 95, "is_graded": True, "feedback": "Great work"})
    res = client.get(f"/v1/courses/{s['course_id']}/students/{s['student_id']}/grade")

    assert res.json()["data"]["final_percentage"] == 86.0


def test_out_of_range_score_is_reported(client, course_setup):
    s = course_setup
    record_grade(client, s["student_id"], s["homework"], 110)
    record_grade(client, s["student_id"], s["exam"], 50)

    data = client.get(f"/v1/courses/{s['course_id']}/students/{s['student_id']}/grade").json()["data"]

    assert data["final_percentage"] == 80.0
    assert data["warnings"][0]["code"] == "SCORE_OUT_OF_RANGE"


def test_misconfigured_weights_return_422(client):
    components = [
        {"name": "Labs", "type": "Lab", "weight": 40},
        {"name": "Homework", "type": "Assignment", "weight": 40},
        {"name": "Final", "type": "Exam", "weight": 19},
    ]
    created = create_course(client, components=components)
    course_id = created["data"]["id"]
    student_id = create_user(client, "jisoo")

    assert any("sum to 99" in issue for issue in created["config_issues"])

    res = client.get(f"/v1/courses/{course_id}/students/{student_id}/grade")
    assert res.status_code == 422
    assert res.json()["error"]["code"] == "CONFIGURATION_ERROR"


def test_unknown_course_returns_not_found(client):
    body = client.get("/v1/courses/999/students/1/grade").json()

    assert body["success"] is False
    assert body["error"]["code"] == 404


def test_grading_config_check(client):
    bands = [{"min_score": 0, "max_score": 70, "grade_value": 0}, {"min_score": 60, "max_score": 100, "grade_value": 1}]
    course_id = create_course(client, bands=bands)["data"]["id"]

    data = client.get(f"/v1/courses/{course_id}/grading-config").json()["data"]

    assert data["valid"] is False
    assert any("overlap" in issue for issue in data["issues"])


# ==========================================================
# 과목 전체 요약
# ==========================================================

def test_grades_summary_keeps_going_on_student_errors(client, course_setup):
    s = course_setup
    record_grade(client, s["student_id"], s["homework"], 80)
    record_grade(client, s["student_id"], s["exam"], 70)

    other = create_user(client, "yuna", last_name="Lee")
    client.post("/v1/enrollments/", json={"student_id": other, "course_id": s["course_id"]})
    record_grade(client, other, s["homework"], 90)

    data = client.get(f"/v1/courses/{s['course_id']}/grades/summary").json()["data"]

    assert data["count"] == 2
    by_student = {row["student"]["id"]: row for row in data["students"]}
    assert by_student[s["student_id"]]["status"] == "ok"
    assert by_student[s["student_id"]]["result"]["grade_value"] == 2
    assert by_student[other]["status"] == "error"
    assert by_student[other]["error"]["code"] == "INCOMPLETE_GRADING"


def test_dropped_students_are_left_out_of_summary(client, course_setup):
    s = course_setup
    enrollment = client.get("/v1/enrollments/", params={"course_id": s["course_id"]}).json()["data"][0]
    client.put(f"/v1/enrollments/{enrollment['id']}", json={"status": "dropped"})

    data = client.get(f"/v1/courses/{s['course_id']}/grades/summary").json()["data"]

    assert data["count"] == 0


# ==========================================================
# 과목 / 과제 / 성적 CRUD
# ==========================================================

def test_course_delete_cascades_to_components_and_bands(client, db):
    course_id = create_course(client)["data"]["id"]

    res = client.delete(f"/v1/courses/{course_id}")

    assert res.json()["success"] is True
    assert db.query(GradeComponentModel).filter(GradeComponentModel.course_id == course_id).count() == 0
    assert db.query(GradeBandModel).filter(GradeBandModel.course_id == course_id).count() == 0


def test_course_with_assignments_cannot_be_deleted(client, course_setup):
    body = client.delete(f"/v1/courses/{course_setup['course_id']}").json()

    assert body["success"] is False
    assert body["error"]["code"] == 409


def test_passing_grade_defaults_from_settings(client):
    course = create_course(client)["data"]

    assert course["passing_grade"] == 50.0


def test_grade_defaults_from_assignment(client, course_setup):
    s = course_setup
    grade = record_grade(client, s["student_id"], s["exam"], 70)

    assert grade["course_id"] == s["course_id"]
    assert grade["max_score"] == 100.0


def test_duplicate_grade_is_rejected(client, course_setup):
    s = course_setup
    record_grade(client, s["student_id"], s["exam"], 70)

    body = client.post("/v1/grades/", json={"student_id": s["student_id"], "assignment_id": s["exam"], "score": 50}).json()

    assert body["success"] is False
    assert body["error"]["code"] == 409


def test_grade_list_is_paginated(client, course_setup):
    s = course_setup
    record_grade(client, s["student_id"], s["homework"], 80)
    record_grade(client, s["student_id"], s["exam"], 70)

    body = client.get("/v1/grades/", params={"course_id": s["course_id"], "page": 1, "size": 1}).json()

    assert len(body["data"]) == 1
    assert body["meta"]["total"] == 2
    assert body["meta"]["pages"] == 2


def test_assignment_status_moves_forward_only(client, course_setup):
    assignment_id = course_setup["exam"]

    res = client.patch(f"/v1/assignments/{assignment_id}/status", json={"status": "published"})
    assert res.json()["data"]["status"] == "published"

    res = client.patch(f"/v1/assignments/{assignment_id}/status", json={"status": "draft"})
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "INVALID_TRANSITION"

    res = client.patch(f"/v1/assignments/{assignment_id}/status", json={"status": "graded"})
    assert res.status_code == 409


def test_latency_header(client):
    res = client.get("/health")

    assert res.json()["status"] == "ok"
    assert "X-Latency-Ms" in res.headers
