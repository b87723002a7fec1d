from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app)

def test_404_not_found():
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "HTTP_ERROR"

def test_validation_error_structure():
    # We can define a temporary route to test validation
    from pydantic import BaseModel

    class Item(BaseModel):
        name: str
        price: int

    @app.post("/test-validation")
    def create_item(item: Item):
        return item

    response = client.post("/test-validation", json={"name": "foo", "price": "invalid"})
    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert len(data["details"]) > 0
    assert data["details"][0]["loc"][-1] == "price"

def test_custom_validation_error_is_400():
    from app.core.exceptions import ValidationError

    @app.get("/test-custom-error")
    def trigger_custom_error():
        raise ValidationError(message="Phone required")

    response = client.get("/test-custom-error")
    assert response.status_code == 400
    data = response.json()
    assert data == {
        "success": False,
        "message": "Phone required",
        "code": "VALIDATION_ERROR",
        "details": None,
    }

def test_external_error_hides_collaborator_details():
    from app.core.exceptions import DeliveryError

    @app.get("/test-delivery-error")
    def trigger_delivery_error():
        raise DeliveryError(details={"status_code": 401, "body": "bad api key"})

    response = client.get("/test-delivery-error")
    assert response.status_code == 500
    data = response.json()
    assert data["code"] == "DELIVERY_FAILED"
    assert data["details"] is None
    assert "bad api key" not in response.text

def test_configuration_error_is_500():
    from app.core.exceptions import ConfigurationError

    @app.get("/test-config-error")
    def trigger_config_error():
        raise ConfigurationError(details={"missing": ["API_KEY"]})

    response = client.get("/test-config-error")
    assert response.status_code == 500
    assert response.json()["code"] == "CONFIGURATION_ERROR"
    assert response.json()["details"] is None
    assert "API_KEY" not in response.text

def test_server_error_details_hidden_for_any_5xx():
    from app.core.exceptions import AdmissionError

    @app.get("/test-generic-5xx")
    def trigger_generic_error():
        raise AdmissionError("Upstream unavailable", code="UPSTREAM", status_code=503, details={"host": "internal"})

    response = client.get("/test-generic-5xx")
    assert response.status_code == 503
    assert response.json()["details"] is None
    assert "internal" not in response.text

def test_default_failure_messages():
    from app.core.exceptions import DeliveryError, ForwardError

    assert DeliveryError().message == "Failed to send OTP"
    assert ForwardError().message == "Failed to submit form"
