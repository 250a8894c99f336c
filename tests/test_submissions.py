from datetime import datetime, timedelta

import pytest

from models.assignment_submissions import AssignmentSubmission as SubmissionModel
from models.assignments import Assignment as AssignmentModel
from models.enums import SubmissionStatus
from services.submission_service import apply_status, is_late


@pytest.fixture
def setup(client):
    course_id = client.post("/v1/courses/", json={
        "code": "OS301", "name": "Operating Systems",
        "grade_components": [{"name": "Homework", "type": "Assignment", "weight": 100}],
    }).json()["data"]["id"]
    student_id = client.post("/v1/users/", json={
        "username": "doyun", "email": "doyun@example.com", "password": "pw",
        "first_name": "Doyun", "last_name": "Jung",
    }).json()["data"]["id"]
    client.post("/v1/enrollments/", json={"student_id": student_id, "course_id": course_id})

    def assignment(due_date):
        return client.post("/v1/assignments/", json={
            "course_id": course_id, "title": "Scheduler", "type": "assignment",
            "max_score": 100, "due_date": due_date,
        }).json()["data"]["id"]

    return {
        "course_id": course_id,
        "student_id": student_id,
        "open": assignment("2999-01-01T00:00:00"),
        "closed": assignment("2020-01-01T00:00:00"),
    }


def submit(client, student_id, assignment_id, **extra):
    return client.post("/v1/submissions/", json={
        "student_id": student_id, "assignment_id": assignment_id, **extra,
    }).json()


# ==========================================================
# 제출
# ==========================================================

def test_submit_before_due_date(client, setup):
    body = submit(client, setup["student_id"], setup["open"], notes="first try")

    assert body["success"] is True
    data = body["data"]
    assert data["status"] == "submitted"
    assert data["submitted_at"] is not None
    assert data["is_late"] is False
    assert data["notes"] == "first try"


def test_submit_after_due_date_is_late(client, setup):
    data = submit(client, setup["student_id"], setup["closed"])["data"]

    assert data["is_late"] is True


def test_duplicate_submission_is_rejected(client, setup):
    submit(client, setup["student_id"], setup["open"])

    body = submit(client, setup["student_id"], setup["open"])

    assert body["success"] is False
    assert body["error"]["code"] == 409


def test_unenrolled_student_cannot_submit(client, setup):
    enrollment = client.get("/v1/enrollments/", params={"course_id": setup["course_id"]}).json()["data"][0]
    client.put(f"/v1/enrollments/{enrollment['id']}", json={"status": "dropped"})

    body = submit(client, setup["student_id"], setup["open"])

    assert body["error"]["code"] == 403


def test_submission_marks_existing_grade_as_submitted(client, setup):
    grade = client.post("/v1/grades/", json={
        "student_id": setup["student_id"], "assignment_id": setup["open"], "score": 0, "is_submitted": False,
    }).json()["data"]
    assert grade["is_submitted"] is False

    submit(client, setup["student_id"], setup["open"])

    assert client.get(f"/v1/grades/{grade['id']}").json()["data"]["is_submitted"] is True


def test_grade_follows_submission_record(client, setup):
    submit(client, setup["student_id"], setup["open"], status="not_submitted")

    grade = client.post("/v1/grades/", json={
        "student_id": setup["student_id"], "assignment_id": setup["open"], "score": 0,
    }).json()["data"]

    assert grade["is_submitted"] is False


# ==========================================================
# 완료 처리 / 수정 / 조회
# ==========================================================

def test_mark_completed_creates_missing_submission(client, setup):
    body = client.post("/v1/submissions/complete", json={
        "student_id": setup["student_id"], "assignment_id": setup["closed"],
    }).json()

    data = body["data"]
    assert data["status"] == "completed"
    assert data["completed_at"] is not None
    assert data["submitted_at"] is not None
    assert data["is_late"] is True


def test_mark_completed_keeps_first_submission_time(client, setup):
    first = submit(client, setup["student_id"], setup["open"])["data"]

    data = client.post("/v1/submissions/complete", json={
        "student_id": setup["student_id"], "assignment_id": setup["open"],
    }).json()["data"]

    assert data["id"] == first["id"]
    assert data["submitted_at"] == first["submitted_at"]
    assert data["status"] == "completed"


def test_update_submission_status_and_notes(client, setup):
    submission = submit(client, setup["student_id"], setup["open"], status="not_submitted")["data"]
    assert submission["submitted_at"] is None

    data = client.put(f"/v1/submissions/{submission['id']}", json={
        "status": "submitted", "notes": "uploaded",
    }).json()["data"]

    assert data["status"] == "submitted"
    assert data["notes"] == "uploaded"
    assert data["submitted_at"] is not None


def test_lookups_by_student_and_assignment(client, setup):
    submit(client, setup["student_id"], setup["open"])
    submit(client, setup["student_id"], setup["closed"])

    by_student = client.get(f"/v1/submissions/student/{setup['student_id']}").json()["data"]
    by_assignment = client.get(f"/v1/submissions/assignment/{setup['open']}").json()["data"]

    assert [s["assignment_id"] for s in by_student] == [setup["closed"], setup["open"]]
    assert len(by_assignment) == 1
    assert client.get("/v1/submissions/assignment/999").json()["error"]["code"] == 404


# ==========================================================
# 지각 판정
# ==========================================================

def test_is_late():
    due = datetime(2024, 6, 1, 12, 0)

    assert is_late(None, due) is False
    assert is_late(due, due) is False
    assert is_late(due, due + timedelta(seconds=1)) is True


def test_apply_status_records_times_once():
    assignment = AssignmentModel(due_date=datetime(2024, 6, 1))
    submission = SubmissionModel(student_id=1, assignment_id=1)
    submitted_at = datetime(2024, 5, 30)
    completed_at = datetime(2024, 6, 2)

    apply_status(submission, SubmissionStatus.SUBMITTED, assignment, now=submitted_at)
    apply_status(submission, SubmissionStatus.COMPLETED, assignment, now=completed_at)

    assert submission.submitted_at == submitted_at
    assert submission.is_late is False
    assert submission.completed_at == completed_at
