from fastapi.testclient import TestClient

from main import app


client = TestClient(app)


def employee(**overrides) -> dict:
    body = {
        "id": "emp-1",
        "company_email": "test@example.com",
        "first_name": "Test",
        "last_name": "User",
        "program": "GROW - Cohort 1",
        "coach_id": "coach-1",
        "status": "Active",
    }
    body.update(overrides)
    return body


def completed_sessions(n: int) -> list:
    return [
        {"id": f"s-{i}", "status": "Completed", "session_date": f"2024-02-{i + 1:02d}T10:00:00Z", "coach_name": "Coach Smith"}
        for i in range(n)
    ]


def test_root():
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_states_lists_all_five_with_labels():
    resp = client.get("/states")
    assert resp.status_code == 200
    body = resp.json()

    assert [s["state"] for s in body] == [
        "NOT_SIGNED_UP",
        "SIGNED_UP_NOT_MATCHED",
        "MATCHED_PRE_FIRST_SESSION",
        "ACTIVE_PROGRAM",
        "COMPLETED_PROGRAM",
    ]
    assert {s["state"] for s in body if s["canBookSessions"]} == {"MATCHED_PRE_FIRST_SESSION", "ACTIVE_PROGRAM"}
    assert body[4]["label"] == "Program Graduate"


def test_normalize_program():
    resp = client.get("/programs/normalize", params={"program": "SCALE - Founders"})
    assert resp.status_code == 200
    assert resp.json() == {"type": "SCALE", "totalExpectedSessions": 6, "isKnown": True}

    resp = client.get("/programs/normalize")
    assert resp.json()["type"] == "Unknown"


def test_coaching_state_active():
    resp = client.post("/coaching-state", json={"employee": employee(), "sessions": completed_sessions(6)})
    assert resp.status_code == 200, resp.text
    body = resp.json()

    assert body["state"] == "ACTIVE_PROGRAM"
    assert body["label"] == "Active Coaching"
    assert body["canBookSessions"] is True
    assert body["isAlumni"] is False
    assert body["programProgress"] == 50
    assert body["lastSession"]["id"] == "s-5"


def test_coaching_state_empty_snapshot():
    resp = client.post("/coaching-state", json={})
    assert resp.status_code == 200, resp.text
    body = resp.json()

    assert body["state"] == "NOT_SIGNED_UP"
    assert body["hasProgram"] is False
    assert body["upcomingSession"] is None


def test_coaching_state_end_of_program_score():
    resp = client.post(
        "/coaching-state",
        json={"employee": employee(), "competency_scores": [{"score_type": "end_of_program", "score": 4}]},
    )
    body = resp.json()

    assert body["state"] == "COMPLETED_PROGRAM"
    assert body["isAlumni"] is True


def test_checkpoint_status_reports_issues():
    resp = client.post(
        "/checkpoints/status",
        json={
            "completed_session_count": 7,
            "checkpoints": [{"checkpoint_number": 1, "session_count_at_checkpoint": 5}],
        },
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()

    assert body["currentCheckpointNumber"] == 2
    assert body["nextCheckpointDueAtSession"] == 12
    assert body["sessionsSinceLastCheckpoint"] == 2
    assert body["isCheckpointDue"] is False
    assert body["label"] == "Check-in 2"
    assert body["issues"] == ["checkpoint 1 taken at session 5, expected 6"]


def test_checkpoint_status_rejects_negative_count():
    resp = client.post("/checkpoints/status", json={"completed_session_count": -1})
    assert resp.status_code == 422


def test_dashboard_summary_scale_client_due_for_first_check_in():
    snapshot = {
        "employee": employee(program="SCALE"),
        "sessions": completed_sessions(6) + [{"id": "next", "status": "Upcoming", "session_date": "2024-03-01T10:00:00Z"}],
        "checkpoints": [],
        "pending_survey": {"survey_type": "feedback", "session_number": 5},
    }

    resp = client.post("/dashboard/summary", json=snapshot)
    assert resp.status_code == 200, resp.text
    body = resp.json()

    assert body["coaching"]["state"] == "ACTIVE_PROGRAM"
    assert body["coaching"]["isScale"] is True
    assert body["checkpointStatus"]["isScaleUser"] is True
    assert body["checkpointStatus"]["isCheckpointDue"] is True
    assert body["checkpointStatus"]["label"] == "First check-in"
    assert body["pendingSurvey"] == {"survey_type": "feedback", "session_number": 5}


def test_dashboard_summary_grow_client_has_no_checkpoints():
    resp = client.post(
        "/dashboard/summary",
        json={"employee": employee(), "sessions": completed_sessions(7), "checkpoints": []},
    )
    body = resp.json()

    assert body["checkpointStatus"]["isScaleUser"] is False
    assert body["checkpointStatus"]["isCheckpointDue"] is False
    assert body["checkpointStatus"]["label"] is None
    assert body["pendingSurvey"] is None


def test_checkpoint_status_accepts_null_fields():
    resp = client.post(
        "/checkpoints/status",
        json={
            "completed_session_count": 7,
            "checkpoints": [
                {
                    "checkpoint_number": 1,
                    "session_count_at_checkpoint": None,
                    "testimonial_consent": None,
                    "email": "jdoe",
                    "competency_scores": {"strategic_thinking": None},
                }
            ],
        },
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()

    assert body["sessionsSinceLastCheckpoint"] == 7
    assert body["currentCheckpointNumber"] == 2
    assert body["issues"] == ["checkpoint 1 has no session count"]


def test_coaching_state_accepts_loose_records():
    resp = client.post(
        "/coaching-state",
        json={
            "employee": employee(company_email="jdoe"),
            "baseline": {"email": "jdoe", "comp_strategic_thinking": 0},
            "competency_scores": [{"email": "", "score_type": "baseline"}],
        },
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()

    assert body["hasBaseline"] is True
    assert body["state"] == "MATCHED_PRE_FIRST_SESSION"
