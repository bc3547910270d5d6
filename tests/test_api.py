# =============================================================================
# tests/test_api.py - HTTP API Tests
# =============================================================================
# Exercises the routers end to end against an in-memory database and checks
# the {success, data, error, message} envelope on every path.
# =============================================================================

import pytest


def _register(client, email="alice@stockmind.io", password="correct-horse", **extra):
    response = client.post("/api/auth/register", json={"email": email, "password": password, **extra})
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def alice(client):
    return _register(client, firstName="Alice")


@pytest.fixture
def bob(client):
    return _register(client, email="bob@stockmind.io")


def _create_project(client, user, **body):
    payload = {"sourceType": "news", "title": "Fed decision", **body}
    response = client.post("/api/projects", params={"user_id": user["id"]}, json=payload)
    assert response.status_code == 200, response.text
    return response.json()["data"]


def _create_script(client, user, **body):
    payload = {"title": "Hook", "content": "Watch this now", **body}
    response = client.post("/api/scripts", params={"user_id": user["id"]}, json=payload)
    assert response.status_code == 200, response.text
    return response.json()["data"]


class TestEnvelope:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_unknown_route_wrapped(self, client):
        response = client.get("/api/nowhere")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Not Found"}

    def test_validation_failure_is_400(self, client):
        response = client.post("/api/auth/register", json={"email": "alice@stockmind.io", "password": "short"})

        body = response.json()
        assert response.status_code == 400
        assert body["success"] is False
        assert body["error"] == "Validation failed"
        assert "password" in body["message"]


class TestAuth:

    def test_register(self, client):
        response = client.post(
            "/api/auth/register",
            json={"email": "alice@stockmind.io", "password": "correct-horse", "firstName": "Alice"},
        )

        body = response.json()
        assert response.status_code == 201
        assert body["success"] is True
        assert body["message"] == "Registration successful"
        assert body["data"]["email"] == "alice@stockmind.io"
        assert body["data"]["firstName"] == "Alice"
        assert "password" not in str(body["data"]).lower()

    def test_register_duplicate_is_409(self, client, alice):
        response = client.post("/api/auth/register", json={"email": "alice@stockmind.io", "password": "another-pass"})

        assert response.status_code == 409
        assert response.json() == {
            "success": False,
            "error": "User with email alice@stockmind.io already exists",
        }

    def test_login(self, client, alice):
        response = client.post("/api/auth/login", json={"email": "alice@stockmind.io", "password": "correct-horse"})

        assert response.status_code == 200
        assert response.json()["data"]["id"] == alice["id"]

    def test_login_wrong_password(self, client, alice):
        response = client.post("/api/auth/login", json={"email": "alice@stockmind.io", "password": "wrong-horse"})

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid email or password"

    def test_me(self, client, alice):
        response = client.get("/api/auth/me", params={"user_id": alice["id"]})

        assert response.json()["data"]["email"] == "alice@stockmind.io"

    def test_me_unknown_user(self, client):
        response = client.get("/api/auth/me", params={"user_id": "missing"})

        assert response.status_code == 404
        assert response.json()["error"] == "User with id missing not found"


class TestUsers:

    def test_update_profile(self, client, alice):
        response = client.put(f"/api/users/{alice['id']}", json={"lastName": "Liddell"})

        data = response.json()["data"]
        assert data["lastName"] == "Liddell"
        assert data["firstName"] == "Alice"

    def test_empty_update_rejected(self, client, alice):
        response = client.put(f"/api/users/{alice['id']}", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "No profile fields to update"

    def test_email_taken(self, client, alice, bob):
        response = client.put(f"/api/users/{bob['id']}", json={"email": "alice@stockmind.io"})

        assert response.status_code == 409

    def test_null_email_rejected(self, client, alice):
        """Email is required on the account, so it can be omitted but not nulled."""
        response = client.put(f"/api/users/{alice['id']}", json={"email": None})

        body = response.json()
        assert response.status_code == 400
        assert body["error"] == "Validation failed"
        assert "email" in body["message"]
        me = client.get("/api/auth/me", params={"user_id": alice["id"]}).json()["data"]
        assert me["email"] == "alice@stockmind.io"


class TestProjects:

    def test_create_and_list(self, client, alice):
        project = _create_project(client, alice)

        response = client.get("/api/projects", params={"user_id": alice["id"]})

        assert project["status"] == "draft"
        assert project["currentStage"] == 1
        assert [p["id"] for p in response.json()["data"]] == [project["id"]]

    def test_unknown_user_is_401(self, client):
        response = client.get("/api/projects", params={"user_id": "missing"})

        assert response.status_code == 401
        assert response.json()["error"] == "Unknown user"

    def test_other_users_project_is_404(self, client, alice, bob):
        project = _create_project(client, alice)

        response = client.get(f"/api/projects/{project['id']}", params={"user_id": bob["id"]})

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Project not found"}

    def test_update(self, client, alice):
        project = _create_project(client, alice)

        response = client.put(
            f"/api/projects/{project['id']}",
            params={"user_id": alice["id"]},
            json={"currentStage": 4, "status": "completed"},
        )

        data = response.json()["data"]
        assert data["currentStage"] == 4
        assert data["status"] == "completed"

    def test_null_for_required_field_rejected(self, client, alice):
        project = _create_project(client, alice)

        response = client.put(
            f"/api/projects/{project['id']}", params={"user_id": alice["id"]}, json={"currentStage": None}
        )

        assert response.status_code == 400
        assert "currentStage" in response.json()["message"]

    def test_null_title_allowed(self, client, alice):
        project = _create_project(client, alice)

        response = client.put(
            f"/api/projects/{project['id']}", params={"user_id": alice["id"]}, json={"title": None}
        )

        assert response.status_code == 200
        assert response.json()["data"]["title"] is None

    def test_status_change_takes_project_out_of_trash(self, client, alice):
        project = _create_project(client, alice)
        params = {"user_id": alice["id"]}
        client.delete(f"/api/projects/{project['id']}", params=params)

        response = client.put(f"/api/projects/{project['id']}", params=params, json={"status": "completed"})

        data = response.json()["data"]
        assert data["status"] == "completed"
        assert data["deletedAt"] is None

    def test_invalid_source_type(self, client, alice):
        response = client.post(
            "/api/projects", params={"user_id": alice["id"]}, json={"sourceType": "fax"}
        )

        assert response.status_code == 400
        assert "sourceType" in response.json()["message"]

    def test_trash_restore_and_permanent_delete(self, client, alice):
        project = _create_project(client, alice)
        params = {"user_id": alice["id"]}

        trashed = client.delete(f"/api/projects/{project['id']}", params=params).json()
        assert trashed["message"] == "Project moved to trash"
        assert trashed["data"]["status"] == "deleted"
        assert client.get("/api/projects", params=params).json()["data"] == []

        restored = client.post(f"/api/projects/{project['id']}/restore", params=params).json()
        assert restored["data"]["status"] == "draft"
        assert restored["data"]["deletedAt"] is None

        gone = client.delete(f"/api/projects/{project['id']}/permanent", params=params)
        assert gone.json()["success"] is True
        assert client.get(f"/api/projects/{project['id']}", params=params).status_code == 404

    def test_create_from_source(self, client, alice):
        response = client.post(
            "/api/projects/from-source",
            params={"user_id": alice["id"]},
            json={
                "project": {"sourceType": "instagram", "sourceData": {"reelId": "r-1"}},
                "stepNumber": 1,
                "stepData": {"transcript": "hello"},
            },
        )
        project = response.json()["data"]

        steps = client.get(f"/api/projects/{project['id']}/steps", params={"user_id": alice["id"]}).json()["data"]

        assert project["sourceType"] == "instagram"
        assert [(s["stepNumber"], s["data"]) for s in steps] == [(1, {"transcript": "hello"})]

    def test_save_step(self, client, alice):
        project = _create_project(client, alice)
        url = f"/api/projects/{project['id']}/steps/2"

        client.put(url, params={"user_id": alice["id"]}, json={"data": {"draft": 1}})
        response = client.put(url, params={"user_id": alice["id"]}, json={"data": {"draft": 2}, "completed": True})

        step = response.json()["data"]
        assert step["data"] == {"draft": 2}
        assert step["completedAt"] is not None

    def test_step_number_out_of_range(self, client, alice):
        project = _create_project(client, alice)

        response = client.put(
            f"/api/projects/{project['id']}/steps/8", params={"user_id": alice["id"]}, json={}
        )

        assert response.status_code == 400

    def test_steps_of_other_users_project(self, client, alice, bob):
        project = _create_project(client, alice)

        response = client.put(
            f"/api/projects/{project['id']}/steps/1", params={"user_id": bob["id"]}, json={"data": {}}
        )

        assert response.status_code == 404


class TestScripts:

    def test_create_and_get(self, client, alice):
        script = _create_script(client, alice)

        response = client.get(f"/api/scripts/{script['id']}", params={"user_id": alice["id"]})

        data = response.json()["data"]
        assert data["wordCount"] == 3
        assert data["status"] == "draft"
        assert data["analysis"] is None

    def test_list_paginates(self, client, alice):
        for n in range(3):
            _create_script(client, alice, title=f"Script {n}")

        response = client.get("/api/scripts", params={"user_id": alice["id"], "limit": 2})

        body = response.json()
        assert body["success"] is True
        assert len(body["data"]) == 2
        assert body["pagination"] == {"total": 3, "page": 1, "limit": 2, "pages": 2}

    def test_list_filters(self, client, alice):
        _create_script(client, alice, title="Rates", sourceType="rss")
        _create_script(client, alice, title="Crypto", sourceType="reddit")

        response = client.get(
            "/api/scripts", params={"user_id": alice["id"], "sourceType": "rss", "status": "all"}
        )

        assert [s["title"] for s in response.json()["data"]] == ["Rates"]

    def test_update_and_delete(self, client, alice):
        script = _create_script(client, alice)
        params = {"user_id": alice["id"]}

        updated = client.put(f"/api/scripts/{script['id']}", params=params, json={"content": "one two"}).json()
        deleted = client.delete(f"/api/scripts/{script['id']}", params=params)

        assert updated["data"]["wordCount"] == 2
        assert deleted.json()["message"] == "Script deleted"
        assert client.get(f"/api/scripts/{script['id']}", params=params).status_code == 404

    def test_null_for_required_field_rejected(self, client, alice):
        script = _create_script(client, alice)
        params = {"user_id": alice["id"]}

        for field in ("title", "scenes", "status"):
            response = client.put(f"/api/scripts/{script['id']}", params=params, json={field: None})

            assert response.status_code == 400, field
            assert field in response.json()["message"]

        assert client.get(f"/api/scripts/{script['id']}", params=params).json()["data"]["title"] == "Hook"

    def test_null_for_optional_field_allowed(self, client, alice):
        script = _create_script(client, alice, notes="draft notes")

        response = client.put(
            f"/api/scripts/{script['id']}", params={"user_id": alice["id"]}, json={"notes": None}
        )

        assert response.status_code == 200
        assert response.json()["data"]["notes"] is None

    def test_other_users_script_is_404(self, client, alice, bob):
        script = _create_script(client, alice)

        response = client.get(f"/api/scripts/{script['id']}", params={"user_id": bob["id"]})

        assert response.status_code == 404
        assert response.json()["error"] == "Script not found"

    def test_save_analysis(self, client, alice):
        script = _create_script(client, alice)

        response = client.post(
            f"/api/scripts/{script['id']}/analysis",
            params={"user_id": alice["id"]},
            json={"overallScore": 70, "verdict": "Solid", "scenes": [{"sceneNumber": 1, "comment": "Tight"}]},
        )

        data = response.json()["data"]
        assert data["status"] == "analyzed"
        assert data["aiScore"] == 70
        assert data["analysis"]["version"] == 1
        assert data["analysis"]["scenes"][0]["comment"] == "Tight"

    def test_analysis_with_unknown_version_rejected(self, client, alice):
        script = _create_script(client, alice)

        response = client.post(
            f"/api/scripts/{script['id']}/analysis",
            params={"user_id": alice["id"]},
            json={"version": 2, "overallScore": 70},
        )

        assert response.status_code == 400

    def test_link_to_own_project(self, client, alice):
        script = _create_script(client, alice)
        project = _create_project(client, alice)

        response = client.post(
            f"/api/scripts/{script['id']}/project",
            params={"user_id": alice["id"]},
            json={"projectId": project["id"]},
        )

        data = response.json()["data"]
        assert data["projectId"] == project["id"]
        assert data["status"] == "in_production"

    def test_link_to_other_users_project(self, client, alice, bob):
        script = _create_script(client, alice)
        project = _create_project(client, bob)

        response = client.post(
            f"/api/scripts/{script['id']}/project",
            params={"user_id": alice["id"]},
            json={"projectId": project["id"]},
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Project not found"
