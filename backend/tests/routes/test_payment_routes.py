"""Route tests for checkout and order recording."""

from __future__ import annotations

from app.core.enums import ApplicationStatus, RoleName
from app.models import TutorApplication
from app.services.stripe_service import CheckoutSession

STUDENT = "student@example.com"
ADMIN = "admin@example.com"


def _paid(application_id: str, **overrides) -> CheckoutSession:
    fields = dict(
        id="cs_paid",
        payment_status="paid",
        payment_intent="pi_route",
        amount_total=15000,
        customer_email=STUDENT,
        customer_name="Student",
        metadata={"tutorId": application_id, "tutorEmail": "tutor@example.com"},
    )
    fields.update(overrides)
    return CheckoutSession(**fields)


class TestCheckout:
    def test_returns_checkout_url(self, client, make_user, auth_headers, fake_gateway) -> None:
        make_user(STUDENT, RoleName.STUDENT)

        response = client.post(
            "/create-checkout-session",
            json={
                "tutorId": "01ARZ3NDEKTSV4RRFFQ69G5FAV",
                "tutorEmail": "tutor@example.com",
                "expectedSalary": 150,
                "name": "Tutor",
            },
            headers=auth_headers(STUDENT),
        )

        assert response.status_code == 200
        assert response.json() == {"url": "https://checkout.stripe.test/c/pay/cs_test_1"}
        assert fake_gateway.created[0]["tutor_id"] == "01ARZ3NDEKTSV4RRFFQ69G5FAV"

    def test_missing_fields_is_400(self, client, make_user, auth_headers) -> None:
        make_user(STUDENT, RoleName.STUDENT)

        response = client.post(
            "/create-checkout-session", json={"name": "Tutor"}, headers=auth_headers(STUDENT)
        )

        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_CHECKOUT_FIELDS"

    def test_zero_salary_is_400(self, client, make_user, auth_headers, fake_gateway) -> None:
        make_user(STUDENT, RoleName.STUDENT)

        response = client.post(
            "/create-checkout-session",
            json={"tutorId": "01ARZ3NDEKTSV4RRFFQ69G5FAV", "expectedSalary": 0},
            headers=auth_headers(STUDENT),
        )

        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_CHECKOUT_FIELDS"
        assert fake_gateway.created == []


class TestPaymentSuccess:
    def test_records_once_and_replays(
        self, client, session_factory, make_user, make_application, auth_headers, fake_gateway
    ) -> None:
        make_user(STUDENT, RoleName.STUDENT)
        application = make_application()
        fake_gateway.add_session(_paid(application.id))

        first = client.post(
            "/payment-success", json={"sessionId": "cs_paid"}, headers=auth_headers(STUDENT)
        )
        second = client.post(
            "/payment-success", json={"sessionId": "cs_paid"}, headers=auth_headers(STUDENT)
        )

        assert first.status_code == 200
        body = first.json()
        assert body["created"] is True
        assert body["message"] == "Order recorded"
        assert body["transactionId"] == "pi_route"
        assert body["amount"] == 150.0
        assert body["tutorId"] == application.id
        assert second.json()["created"] is False
        assert second.json()["_id"] == body["_id"]
        with session_factory() as session:
            stored = session.get(TutorApplication, application.id)
            assert stored.status == ApplicationStatus.APPROVED.value

        orders = client.get("/my-orders", headers=auth_headers(STUDENT)).json()
        assert [o["transactionId"] for o in orders] == ["pi_route"]

    def test_unpaid_session_is_400(
        self, client, make_user, make_application, auth_headers, fake_gateway
    ) -> None:
        make_user(STUDENT, RoleName.STUDENT)
        application = make_application()
        fake_gateway.add_session(_paid(application.id, payment_status="unpaid"))

        response = client.post(
            "/payment-success", json={"sessionId": "cs_paid"}, headers=auth_headers(STUDENT)
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Payment not verified"
        assert response.json()["code"] == "PAYMENT_NOT_VERIFIED"
        assert client.get("/my-orders", headers=auth_headers(STUDENT)).json() == []

    def test_missing_session_id_is_400(self, client, make_user, auth_headers) -> None:
        make_user(STUDENT, RoleName.STUDENT)

        response = client.post("/payment-success", json={}, headers=auth_headers(STUDENT))

        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_SESSION_ID"


class TestAdminOrders:
    def test_transaction_history_is_admin_only(
        self, client, make_user, make_application, auth_headers, fake_gateway
    ) -> None:
        make_user(STUDENT, RoleName.STUDENT)
        make_user(ADMIN, RoleName.ADMIN)
        application = make_application()
        fake_gateway.add_session(_paid(application.id))
        client.post("/payment-success", json={"sessionId": "cs_paid"}, headers=auth_headers(STUDENT))

        assert client.get("/transaction-history", headers=auth_headers(STUDENT)).status_code == 403
        history = client.get("/transaction-history", headers=auth_headers(ADMIN)).json()
        assert len(history) == 1

    def test_reconcile_reports_repaired_count(self, client, make_user, auth_headers) -> None:
        make_user(ADMIN, RoleName.ADMIN)

        response = client.post("/admin/reconcile-orders", headers=auth_headers(ADMIN))

        assert response.json() == {"repaired": 0}
