from fastapi.testclient import TestClient
from liftlog.main import app
from liftlog.deps.auth import get_revalidator

from conftest import RecordingRevalidator, auth_headers, new_user_id

client = TestClient(app)


def test_log_workout_with_exercise_and_sets():
    H = auth_headers()

    # create workout
    r = client.post("/workouts", headers=H, json={"name": "Leg Day", "started_at": "2025-01-10T08:00:00Z"})
    assert r.status_code == 201, r.text
    workout = r.json()["data"]
    assert workout["completed_at"] is None
    workout_id = workout["id"]

    # add exercise by name
    r = client.post(f"/workouts/{workout_id}/exercises", headers=H,
                    json={"exercise_name": f"Squat {new_user_id()}", "order": 1})
    assert r.status_code == 201, r.text
    we_id = r.json()["data"]["id"]

    # log sets (auto numbered)
    for weight, reps in (("100", 5), ("110", 3)):
        r = client.post(f"/workout-exercises/{we_id}/sets", headers=H, json={"weight": weight, "reps": reps})
        assert r.status_code == 201, r.text
    assert r.json()["data"]["set_number"] == 2

    # complete it
    r = client.post(f"/workouts/{workout_id}/complete", headers=H, json={"completed_at": "2025-01-10T09:00:00Z"})
    assert r.status_code == 200, r.text
    assert r.json()["data"]["is_completed"] is True

    # dashboard for the day
    r = client.get("/workouts", headers=H, params={"day": "2025-01-10"})
    assert r.status_code == 200
    day = r.json()["data"]
    assert [w["id"] for w in day] == [workout_id]
    sets = day[0]["workout_exercises"][0]["sets"]
    assert [s["set_number"] for s in sets] == [1, 2]
    assert [s["reps"] for s in sets] == [5, 3]


def test_other_user_sees_404():
    owner, other = auth_headers(), auth_headers()
    workout_id = client.post("/workouts", headers=owner, json={"started_at": "2025-01-10T08:00:00"}).json()["data"]["id"]
    for method, path in (
        ("get", f"/workouts/{workout_id}"),
        ("patch", f"/workouts/{workout_id}"),
        ("delete", f"/workouts/{workout_id}"),
        ("post", f"/workouts/{workout_id}/reopen"),
    ):
        kwargs = {"json": {"name": "mine now"}} if method == "patch" else {}
        r = client.request(method.upper(), path, headers=other, **kwargs)
        assert r.status_code == 404, (method, path, r.text)
        assert r.json()["error"] == "Workout not found or unauthorized"
    assert client.get(f"/workouts/{workout_id}", headers=owner).status_code == 200


def test_validation_errors_are_422_with_fields():
    H = auth_headers()
    r = client.post("/workouts", headers=H, json={"started_at": "someday"})
    assert r.status_code == 422
    body = r.json()
    assert body["code"] == "validation_error"
    assert body["field_errors"][0]["field"] == "started_at"


def test_delete_cascades_over_http():
    H = auth_headers()
    r = client.post("/workouts/bulk", headers=H, json={
        "started_at": "2025-03-01T07:00:00",
        "exercises": [{"exercise_name": f"Press {new_user_id()}", "sets": [{"weight": 40, "reps": 5}]}],
    })
    assert r.status_code == 201, r.text
    detail = r.json()["data"]
    we_id = detail["workout_exercises"][0]["id"]
    set_id = detail["workout_exercises"][0]["sets"][0]["id"]

    assert client.delete(f"/workouts/{detail['id']}", headers=H).status_code == 200
    assert client.patch(f"/sets/{set_id}", headers=H, json={"reps": 1}).status_code == 404
    assert client.delete(f"/workout-exercises/{we_id}", headers=H).status_code == 404


def test_revalidation_paths_signalled():
    recorder = RecordingRevalidator()
    app.dependency_overrides[get_revalidator] = lambda: recorder
    try:
        H = auth_headers()
        workout_id = client.post("/workouts", headers=H, json={"started_at": "2025-01-10T08:00:00"}).json()["data"]["id"]
        client.patch(f"/workouts/{workout_id}", headers=H, json={"name": "Renamed"})
    finally:
        app.dependency_overrides.pop(get_revalidator, None)
    assert recorder.paths == ["/dashboard", "/dashboard", f"/dashboard/workout/{workout_id}"]


def test_exercise_library():
    H = auth_headers()
    tag = new_user_id()
    r = client.post("/exercises", headers=H, json={"name": f"Good Morning {tag}"})
    assert r.status_code == 201
    r = client.get("/exercises", headers=H, params={"search": tag, "limit": "5"})
    assert r.status_code == 200
    page = r.json()["data"]
    assert page["total"] == 1
    assert page["items"][0]["name"] == f"Good Morning {tag}"
    assert client.get("/exercises", headers=H, params={"limit": "0"}).status_code == 422


def test_out_of_range_and_malformed_ids_are_422():
    H = auth_headers()
    for method, path in (
        ("get", "/workouts/18446744073709551616"),
        ("get", "/workouts/2147483648"),
        ("delete", "/workouts/0"),
        ("delete", "/workout-exercises/18446744073709551616"),
        ("delete", "/sets/abc"),
    ):
        r = client.request(method.upper(), path, headers=H)
        assert r.status_code == 422, (path, r.text)
        body = r.json()
        assert body["success"] is False
        assert body["code"] == "validation_error"
        assert body["field_errors"][0]["field"] in {"workout_id", "workout_exercise_id", "set_id"}


def test_non_object_body_is_422_in_result_shape():
    r = client.post("/workouts", headers=auth_headers(), json=["not", "an", "object"])
    assert r.status_code == 422
    body = r.json()
    assert body["code"] == "validation_error"
    assert body["field_errors"][0]["field"] == "body"


def test_dashboard_summary_fields():
    H = auth_headers()
    tag = new_user_id()
    r = client.post("/workouts/bulk", headers=H, json={
        "started_at": "2025-03-02T07:00:00",
        "exercises": [
            {"exercise_name": f"Squat {tag}", "sets": [{"weight": 100, "reps": 5}, {"weight": 110, "reps": 3}]},
            {"exercise_name": f"Plank {tag}"},
        ],
    })
    assert r.status_code == 201, r.text
    detail = client.get(f"/workouts/{r.json()['data']['id']}", headers=H).json()["data"]
    assert detail["exercise_count"] == 2
    squat, plank = detail["workout_exercises"]
    assert (squat["total_sets"], squat["avg_reps"], squat["avg_weight"]) == (2, 4, "105.00")
    assert (plank["total_sets"], plank["avg_reps"], plank["avg_weight"]) == (0, 0, "0.00")
