"""Unit tests for ApplicationRepository's Pending-only edit."""

from __future__ import annotations

from decimal import Decimal

from app.core.enums import ApplicationStatus
from app.repositories.application_repository import ApplicationRepository


def _edit(repo: ApplicationRepository, application_id: str) -> int:
    return repo.update_if_pending(
        application_id,
        qualifications="MSc Physics",
        experience="5 years",
        expected_salary=Decimal("300.00"),
    )


class TestUpdateIfPending:
    def test_pending_application_is_updated(self, db, make_application) -> None:
        application = make_application()
        repo = ApplicationRepository(db)

        matched = _edit(repo, application.id)
        db.commit()

        stored = repo.get_by_id(application.id)
        assert matched == 1
        assert stored.qualifications == "MSc Physics"
        assert stored.experience == "5 years"
        assert stored.expected_salary == Decimal("300.00")

    def test_approved_application_is_left_untouched(self, db, make_application) -> None:
        application = make_application(status=ApplicationStatus.APPROVED)
        repo = ApplicationRepository(db)

        matched = _edit(repo, application.id)
        db.commit()

        stored = repo.get_by_id(application.id)
        assert matched == 0
        assert stored.qualifications == "BSc Mathematics"
        assert stored.experience == "3 years"
        assert stored.expected_salary == Decimal("150.00")
        assert stored.status == ApplicationStatus.APPROVED.value

    def test_rejected_application_is_left_untouched(self, db, make_application) -> None:
        application = make_application(status=ApplicationStatus.REJECTED)

        assert _edit(ApplicationRepository(db), application.id) == 0


class TestListing:
    def test_list_by_tutor_email(self, db, make_application) -> None:
        mine = make_application("a@example.com")
        make_application("b@example.com")

        results = ApplicationRepository(db).list_by_tutor_email("a@example.com")

        assert [a.id for a in results] == [mine.id]

    def test_update_status_is_unconditional(self, db, make_application) -> None:
        application = make_application(status=ApplicationStatus.REJECTED)
        repo = ApplicationRepository(db)

        assert repo.update_status(application.id, ApplicationStatus.APPROVED.value) == 1
        db.commit()
        assert repo.get_by_id(application.id).status == ApplicationStatus.APPROVED.value
