"""Route tests for tuition postings."""

from __future__ import annotations

from app.core.enums import RoleName, TuitionStatus

STUDENT = "student@example.com"
ADMIN = "admin@example.com"
TUTOR = "tutor@example.com"


def _create(client, headers, **overrides):
    body = {"subject": "Mathematics", "classLevel": "Class 8", "location": "Dhaka", "budget": 120.5}
    body.update(overrides)
    return client.post("/tuitions", json=body, headers=headers)


class TestCreateAndModerate:
    def test_student_posting_is_hidden_until_admin_approves(
        self, client, make_user, auth_headers
    ) -> None:
        make_user(STUDENT, RoleName.STUDENT)
        make_user(ADMIN, RoleName.ADMIN)

        created = _create(client, auth_headers(STUDENT))
        assert created.status_code == 200
        body = created.json()
        assert body["acknowledged"] is True
        tuition_id = body["insertedId"]

        assert client.get("/tuitions").json() == []

        approved = client.patch(
            f"/tuition/status/{tuition_id}",
            json={"status": TuitionStatus.APPROVED.value},
            headers=auth_headers(ADMIN),
        )
        assert approved.json() == {"acknowledged": True, "matchedCount": 1, "modifiedCount": 1}

        board = client.get("/tuitions").json()
        assert len(board) == 1
        posting = board[0]
        assert posting["_id"] == tuition_id
        assert posting["classLevel"] == "Class 8"
        assert posting["budget"] == 120.5
        assert posting["status"] == "Approved"
        assert posting["postedByEmail"] == STUDENT

    def test_tutor_may_not_post(self, client, make_user, auth_headers) -> None:
        make_user(TUTOR, RoleName.TUTOR)

        response = _create(client, auth_headers(TUTOR))

        assert response.status_code == 403
        problem = response.json()
        assert problem["status"] == 403
        assert problem["code"] == "FORBIDDEN_ROLE"
        assert problem["instance"] == "/tuitions"

    def test_caller_without_user_record_has_no_role(self, client, auth_headers) -> None:
        assert _create(client, auth_headers("ghost@example.com")).status_code == 403

    def test_missing_token_is_401(self, client) -> None:
        response = _create(client, {})

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHENTICATED"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_garbage_token_is_401(self, client) -> None:
        response = client.get("/my-tuitions", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_CREDENTIAL"

    def test_negative_budget_is_422(self, client, make_user, auth_headers) -> None:
        make_user(STUDENT, RoleName.STUDENT)

        response = _create(client, auth_headers(STUDENT), budget=-1)

        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"

    def test_status_update_rejects_unknown_status(self, client, make_user, make_tuition, auth_headers) -> None:
        make_user(ADMIN, RoleName.ADMIN)
        posting = make_tuition()

        response = client.patch(
            f"/tuition/status/{posting.id}", json={"status": "Archived"}, headers=auth_headers(ADMIN)
        )

        assert response.status_code == 422


class TestOwnership:
    def test_only_poster_or_admin_may_edit_and_delete(
        self, client, make_user, make_tuition, auth_headers
    ) -> None:
        make_user(STUDENT, RoleName.STUDENT)
        make_user("other@example.com", RoleName.STUDENT)
        make_user(ADMIN, RoleName.ADMIN)
        posting = make_tuition(posted_by_email=STUDENT)
        edit = {"subject": "Physics", "classLevel": "Class 9", "location": "Sylhet", "budget": "80"}

        forbidden = client.put(
            f"/tuitions/{posting.id}", json=edit, headers=auth_headers("other@example.com")
        )
        assert forbidden.status_code == 403

        updated = client.put(f"/tuitions/{posting.id}", json=edit, headers=auth_headers(STUDENT))
        assert updated.json()["matchedCount"] == 1

        deleted = client.delete(f"/tuitions/{posting.id}", headers=auth_headers(ADMIN))
        assert deleted.json() == {"acknowledged": True, "deletedCount": 1}

        missing = client.delete(f"/tuitions/{posting.id}", headers=auth_headers(ADMIN))
        assert missing.status_code == 404

    def test_my_tuitions_lists_own_postings_in_any_status(
        self, client, make_user, make_tuition, auth_headers
    ) -> None:
        make_user(STUDENT, RoleName.STUDENT)
        mine = make_tuition(posted_by_email=STUDENT, status=TuitionStatus.PENDING)
        make_tuition(posted_by_email="other@example.com")

        response = client.get("/my-tuitions", headers=auth_headers(STUDENT))

        assert [p["_id"] for p in response.json()] == [mine.id]

    def test_admin_listing_filters_by_status(
        self, client, make_user, make_tuition, auth_headers
    ) -> None:
        make_user(ADMIN, RoleName.ADMIN)
        pending = make_tuition(status=TuitionStatus.PENDING)
        make_tuition(status=TuitionStatus.APPROVED)

        everything = client.get("/admin/tuitions", headers=auth_headers(ADMIN)).json()
        only_pending = client.get(
            "/admin/tuitions", params={"status": "Pending"}, headers=auth_headers(ADMIN)
        ).json()

        assert len(everything) == 2
        assert [p["_id"] for p in only_pending] == [pending.id]


class TestPublicListings:
    def test_listing_falls_back_to_defaults_for_bad_paging(self, client, make_tuition) -> None:
        ids = [make_tuition(f"S{i:02d}").id for i in range(12)]

        response = client.get("/tuitions-listing", params={"page": "abc", "size": "-3"})

        body = response.json()
        assert body["totalCount"] == 12
        assert [p["_id"] for p in body["result"]] == ids[::-1][:10]

    def test_listing_second_page(self, client, make_tuition) -> None:
        ids = [make_tuition(f"S{i:02d}").id for i in range(25)]

        body = client.get("/tuitions-listing", params={"page": "2", "size": "10"}).json()

        assert body["totalCount"] == 25
        assert [p["_id"] for p in body["result"]] == ids[::-1][10:20]

    def test_listing_bounds_huge_page_and_size(self, client, make_tuition) -> None:
        ids = [make_tuition(f"S{i:03d}").id for i in range(105)]

        far = client.get(
            "/tuitions-listing", params={"page": "100000000000000000000", "size": "10"}
        )
        wide = client.get("/tuitions-listing", params={"page": "1", "size": "1000"})

        assert far.status_code == 200
        assert far.json() == {"result": [], "totalCount": 105}
        assert wide.status_code == 200
        assert [p["_id"] for p in wide.json()["result"]] == ids[::-1][:100]

    def test_search_filters_and_sorts(self, client, make_tuition) -> None:
        make_tuition("Mathematics", class_level="Class 8", budget="300")
        make_tuition("Applied Math", class_level="Class 8", budget="100")
        make_tuition("Math Olympiad", class_level="Class 10", budget="50")
        make_tuition("Physics", class_level="Class 8", budget="10")

        response = client.get(
            "/all-tuitions",
            params={"search": "MATH", "filterClass": "Class 8", "sort": "budgetLow"},
        )

        assert [p["subject"] for p in response.json()] == ["Applied Math", "Mathematics"]

    def test_latest_tuitions(self, client, make_tuition) -> None:
        ids = [make_tuition(f"S{i}").id for i in range(4)]

        response = client.get("/latest-tuitions")

        assert [p["_id"] for p in response.json()] == ids[::-1][:3]
