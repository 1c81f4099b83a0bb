import logging
import uuid


class TestCorrelationIdMiddleware:
    def test_returns_provided_request_id(self, client):
        custom_id = "my-custom-request-id-123"
        response = client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        assert response["X-Request-ID"] == custom_id

    def test_generates_uuid_when_no_request_id(self, client):
        response = client.get("/health")
        request_id = response["X-Request-ID"]
        parsed = uuid.UUID(request_id, version=4)
        assert str(parsed) == request_id

    def test_correlation_id_in_logs(self, client, caplog):
        custom_id = "log-test-correlation-456"
        with caplog.at_level(logging.INFO):
            client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        found = any(custom_id in record.getMessage() for record in caplog.records)
        assert found, (
            f"correlation_id '{custom_id}' not found in log records: "
            f"{[r.getMessage() for r in caplog.records]}"
        )

    def test_correlation_id_reaches_service_logs(
        self, api_client_with_correlation, admin_user, make_product, caplog
    ):
        client, cid = api_client_with_correlation
        client.force_authenticate(user=admin_user)
        product = make_product()
        with caplog.at_level(logging.INFO):
            client.post(
                "/api/v1/orders/",
                {"items": [{"product_id": str(product.id), "quantity": 1}]},
                format="json",
            )
        messages = [r.getMessage() for r in caplog.records]
        assert any("order.created" in m and cid in m for m in messages), messages


class TestSensitiveDataMasking:
    def test_password_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]
        assert result["header"] == "token=***MASKED***"

    def test_authorization_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "authorization=eyJhbGciOiJIUzI1NiJ9"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "eyJhbGciOiJIUzI1NiJ9" not in result["header"]

    def test_non_sensitive_data_unchanged(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "order.created", "order_id": "0b9e4c1a", "total": "30.00"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result == {"event": "order.created", "order_id": "0b9e4c1a", "total": "30.00"}
