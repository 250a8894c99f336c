import pytest

from models.component_scores import ComponentScore as ComponentScoreModel

COMPONENTS = [
    {"name": "Labs", "type": "Lab", "weight": 50, "total_points": 40},
    {"name": "Final exam", "type": "Exam", "weight": 50},
]


@pytest.fixture
def setup(client):
    course = client.post("/v1/courses/", json={
        "code": "DB201", "name": "Databases", "grade_components": COMPONENTS,
    }).json()["data"]
    student_id = client.post("/v1/users/", json={
        "username": "seojun", "email": "seojun@example.com", "password": "pw",
        "first_name": "Seojun", "last_name": "Choi",
    }).json()["data"]["id"]
    client.post("/v1/enrollments/", json={"student_id": student_id, "course_id": course["id"]})
    components = {c["name"]: c["id"] for c in course["grade_components"]}
    return {"course_id": course["id"], "student_id": student_id, **components}


def add_score(client, student_id, component_id, points):
    return client.post("/v1/component-scores/", json={
        "student_id": student_id, "grade_component_id": component_id, "points_earned": points,
    })


def test_create_component_score(client, setup):
    body = add_score(client, setup["student_id"], setup["Labs"], 30).json()

    assert body["success"] is True
    assert body["data"]["course_id"] == setup["course_id"]
    assert body["data"]["points_earned"] == 30.0
    assert body["data"]["is_graded"] is False


def test_progress_uses_component_total_points(client, setup):
    add_score(client, setup["student_id"], setup["Labs"], 30)
    add_score(client, setup["student_id"], setup["Final exam"], 0)

    data = client.get("/v1/component-scores/progress", params={
        "course_id": setup["course_id"], "student_id": setup["student_id"],
    }).json()["data"]

    assert data["total_components"] == 2
    assert data["completed_components"] == 1
    assert data["total_points_earned"] == 30.0
    assert data["total_possible_points"] == 140.0
    assert data["percentage"] == 21.43


def test_progress_without_scores_is_zero(client, setup):
    data = client.get("/v1/component-scores/progress", params={
        "course_id": setup["course_id"], "student_id": setup["student_id"],
    }).json()["data"]

    assert data["total_components"] == 0
    assert data["percentage"] == 0.0


def test_points_above_total_are_rejected(client, setup):
    res = add_score(client, setup["student_id"], setup["Labs"], 41)

    assert res.status_code == 422
    assert res.json()["error"]["code"] == "SCORE_OUT_OF_RANGE"
    assert res.json()["error"]["details"]["total_points"] == 40.0


def test_update_checks_points_against_total(client, setup):
    score = add_score(client, setup["student_id"], setup["Labs"], 10).json()["data"]

    res = client.put(f"/v1/component-scores/{score['id']}", json={"points_earned": 50})
    assert res.status_code == 422

    body = client.put(f"/v1/component-scores/{score['id']}", json={
        "points_earned": 35, "feedback": "Good", "is_graded": True,
    }).json()
    assert body["data"]["points_earned"] == 35.0
    assert body["data"]["feedback"] == "Good"
    assert body["data"]["is_graded"] is True


def test_duplicate_component_score_is_rejected(client, setup):
    add_score(client, setup["student_id"], setup["Labs"], 10)

    body = add_score(client, setup["student_id"], setup["Labs"], 20).json()

    assert body["success"] is False
    assert body["error"]["code"] == 409


def test_student_must_be_enrolled(client, setup):
    outsider = client.post("/v1/users/", json={
        "username": "guest", "email": "guest@example.com", "password": "pw",
        "first_name": "Guest", "last_name": "Han",
    }).json()["data"]["id"]

    body = add_score(client, outsider, setup["Labs"], 10).json()

    assert body["success"] is False
    assert body["error"]["code"] == 403


def test_list_filters_and_delete(client, setup):
    add_score(client, setup["student_id"], setup["Labs"], 10)
    exam = add_score(client, setup["student_id"], setup["Final exam"], 80).json()["data"]

    listed = client.get("/v1/component-scores/", params={"grade_component_id": setup["Labs"]}).json()["data"]
    assert len(listed) == 1

    assert client.delete(f"/v1/component-scores/{exam['id']}").json()["success"] is True
    assert client.get(f"/v1/component-scores/{exam['id']}").json()["error"]["code"] == 404


def test_component_delete_removes_its_scores(client, db, setup):
    add_score(client, setup["student_id"], setup["Labs"], 10)

    client.delete(f"/v1/courses/{setup['course_id']}/components/{setup['Labs']}")

    assert db.query(ComponentScoreModel).count() == 0


def test_course_delete_removes_enrollments_and_scores(client, db, setup):
    add_score(client, setup["student_id"], setup["Labs"], 10)

    body = client.delete(f"/v1/courses/{setup['course_id']}").json()

    assert body["success"] is True
    assert db.query(ComponentScoreModel).count() == 0
    assert client.get("/v1/enrollments/", params={"course_id": setup["course_id"]}).json()["data"] == []
