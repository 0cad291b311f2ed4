import logging
from datetime import date

from app.core.logging import get_logger, request_id, user_id


class TestLoggerAdapter:
    def test_records_carry_context_variables(self, caplog):
        rid_token = request_id.set("req-1")
        uid_token = user_id.set("7")
        try:
            with caplog.at_level(logging.INFO):
                get_logger("tests.adapter").info("hello", extra={"booking_id": 3})
        finally:
            user_id.reset(uid_token)
            request_id.reset(rid_token)

        [record] = [r for r in caplog.records if r.name == "tests.adapter"]
        assert record.request_id == "req-1"
        assert record.user_id == "7"
        assert record.booking_id == 3


class TestRequestLogging:
    def test_request_line_carries_request_id(self, client, caplog):
        with caplog.at_level(logging.INFO):
            response = client.get("/api/v1/health", headers={"X-Request-ID": "req-abc"})

        assert response.headers["X-Request-ID"] == "req-abc"
        lines = [r.getMessage() for r in caplog.records if r.name == "app.core.middleware"]
        assert any("Request completed" in line and "req-abc" in line for line in lines)

    def test_service_logs_carry_request_and_user(self, client, caplog, room, customer, make_booking, auth_headers):
        booking = make_booking(customer, room, date(2030, 1, 1), date(2030, 1, 3))
        headers = {**auth_headers(customer), "X-Request-ID": "req-cancel"}

        with caplog.at_level(logging.INFO):
            response = client.put(f"/api/v1/bookings/{booking.id}/cancel", headers=headers)

        assert response.status_code == 200
        [record] = [
            r for r in caplog.records
            if r.name == "BookingService" and "refund" in r.getMessage()
        ]
        assert record.user_id == str(customer.id)
        assert record.request_id == "req-cancel"
        assert record.booking_id == booking.id
