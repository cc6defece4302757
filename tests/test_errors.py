import pytest
from planka_mcp.core.errors import (
    ErrorKind,
    PlankaAPIError,
    PlankaAuthError,
    PlankaConfigError,
    PlankaError,
    PlankaNetworkError,
    PlankaNotFoundError,
    PlankaPermissionError,
    PlankaValidationError,
    describe_error,
    error_from_response,
)


@pytest.mark.parametrize(
    "status,error_cls",
    [
        (401, PlankaAuthError),
        (403, PlankaPermissionError),
        (404, PlankaNotFoundError),
        (422, PlankaValidationError),
        (400, PlankaAPIError),
        (500, PlankaAPIError),
        (503, PlankaAPIError),
    ],
)
def test_error_from_response_maps_status(status, error_cls):
    err = error_from_response(status, {"message": "boom"}, "GET /api/x")
    assert type(err) is error_cls
    assert err.status == status


def test_message_falls_back_when_body_has_none():
    err = error_from_response(500, ["not", "a", "dict"], "GET /api/x")
    assert err.message == "Unknown error (GET /api/x)"


def test_every_kind_is_described():
    errors = [
        PlankaConfigError("Missing required environment variables: PLANKA_BASE_URL"),
        PlankaAuthError("bad token"),
        PlankaPermissionError("not a board member"),
        PlankaNotFoundError("Resource not found: GET /api/cards/1"),
        PlankaValidationError("bad input"),
        PlankaNetworkError("connection refused"),
        PlankaAPIError("exploded", status=500),
    ]
    assert {e.kind for e in errors} == set(ErrorKind)
    for err in errors:
        assert err.message in describe_error(err)


def test_describe_configuration_lists_required_vars():
    text = describe_error(PlankaConfigError("Missing required environment variables"))
    assert text.startswith("Configuration error: ")
    for name in ("PLANKA_BASE_URL", "PLANKA_AGENT_EMAIL", "PLANKA_AGENT_PASSWORD"):
        assert f"- {name}" in text


def test_describe_network_distinguishes_timeout():
    assert describe_error(PlankaNetworkError("slow", timeout=True)).startswith(
        "Network timeout: "
    )
    assert describe_error(PlankaNetworkError("down")).startswith("Network error: ")


def test_describe_validation_includes_details():
    err = PlankaValidationError("Invalid type", details={"field": "type"})
    assert describe_error(err) == (
        "Validation error: Invalid type\nDetails: {'field': 'type'}"
    )


def test_describe_api_error_includes_status():
    assert describe_error(PlankaAPIError("exploded", status=500)) == (
        "PLANKA error (500): exploded"
    )


def test_base_error_defaults_to_api_kind():
    assert PlankaError("x").kind is ErrorKind.API


def test_describe_not_found_has_a_single_prefix():
    err = error_from_response(404, {"message": "Card not found"}, "GET /api/cards/x")
    assert describe_error(err) == "Resource not found: GET /api/cards/x"
