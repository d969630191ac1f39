"""Route tests for tutor applications."""

from __future__ import annotations

from app.core.enums import ApplicationStatus, RoleName

TUTOR = "tutor@example.com"
STUDENT = "student@example.com"
ADMIN = "admin@example.com"


class TestApplications:
    def test_tutor_applies_and_sees_it_as_ongoing(self, client, make_user, auth_headers) -> None:
        make_user(TUTOR, RoleName.TUTOR)

        created = client.post(
            "/applications",
            json={
                "tutorName": "Tutor",
                "qualifications": "BSc",
                "experience": "2 years",
                "expectedSalary": 150,
            },
            headers=auth_headers(TUTOR),
        )
        assert created.status_code == 200
        application_id = created.json()["insertedId"]

        ongoing = client.get("/my-ongoing-tuitions", headers=auth_headers(TUTOR)).json()
        assert len(ongoing) == 1
        assert ongoing[0]["_id"] == application_id
        assert ongoing[0]["tutorEmail"] == TUTOR
        assert ongoing[0]["expectedSalary"] == 150.0
        assert ongoing[0]["status"] == "Pending"

    def test_student_may_not_apply(self, client, make_user, auth_headers) -> None:
        make_user(STUDENT, RoleName.STUDENT)

        response = client.post(
            "/applications", json={"expectedSalary": 10}, headers=auth_headers(STUDENT)
        )

        assert response.status_code == 403

    def test_listing_another_tutors_applications_is_forbidden(
        self, client, make_user, make_application, auth_headers
    ) -> None:
        make_user(TUTOR, RoleName.TUTOR)
        make_user(ADMIN, RoleName.ADMIN)
        make_application("someone@example.com")

        assert (
            client.get("/applications/someone@example.com", headers=auth_headers(TUTOR)).status_code
            == 403
        )
        admin_view = client.get("/applications/someone@example.com", headers=auth_headers(ADMIN))
        assert len(admin_view.json()) == 1

    def test_edit_only_applies_while_pending(
        self, client, make_user, make_application, auth_headers
    ) -> None:
        make_user(TUTOR, RoleName.TUTOR)
        pending = make_application(TUTOR)
        approved = make_application(TUTOR, status=ApplicationStatus.APPROVED)
        edit = {"qualifications": "PhD", "experience": "10 years", "expectedSalary": 500}

        applied = client.put(f"/applications/{pending.id}", json=edit, headers=auth_headers(TUTOR))
        ignored = client.put(f"/applications/{approved.id}", json=edit, headers=auth_headers(TUTOR))

        assert applied.json()["matchedCount"] == 1
        assert ignored.status_code == 200
        assert ignored.json() == {"acknowledged": True, "matchedCount": 0, "modifiedCount": 0}

    def test_status_route_accepts_patch_and_put(
        self, client, make_user, make_application, auth_headers
    ) -> None:
        make_user(STUDENT, RoleName.STUDENT)
        application = make_application()

        rejected = client.patch(
            f"/applications/status/{application.id}",
            json={"status": "Rejected"},
            headers=auth_headers(STUDENT),
        )
        approved = client.put(
            f"/applications/status/{application.id}",
            json={"status": "Approved"},
            headers=auth_headers(STUDENT),
        )

        assert rejected.json()["matchedCount"] == 1
        assert approved.json()["matchedCount"] == 1
        listed = client.get("/applications", headers=auth_headers(STUDENT)).json()
        assert listed[0]["status"] == "Approved"

    def test_tutor_withdraws_application(
        self, client, make_user, make_application, auth_headers
    ) -> None:
        make_user(TUTOR, RoleName.TUTOR)
        application = make_application(TUTOR)

        response = client.delete(f"/applications/{application.id}", headers=auth_headers(TUTOR))

        assert response.json() == {"acknowledged": True, "deletedCount": 1}

    def test_malformed_id_is_rejected(self, client, make_user, auth_headers) -> None:
        make_user(TUTOR, RoleName.TUTOR)

        response = client.delete("/applications/not-an-id", headers=auth_headers(TUTOR))

        assert response.status_code == 422
