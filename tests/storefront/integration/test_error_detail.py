from unittest.mock import MagicMock

from storefront.client.response import extract_error_detail


def _response(body=None, text=""):
    response = MagicMock()
    if body is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = body
    response.text = text
    return response


def test_validation_detail_list():
    body = {"detail": [{"loc": ["body", "customer", "email"], "msg": "field required", "type": "missing"}]}
    assert extract_error_detail(_response(body)) == "body.customer.email: field required"


def test_detail_string():
    assert extract_error_detail(_response({"detail": "Order not found"})) == "Order not found"


def test_error_mapping():
    assert extract_error_detail(_response({"error": {"stock": "insufficient"}})) == "stock: insufficient"


def test_error_string():
    assert extract_error_detail(_response({"error": "Unauthorized"})) == "Unauthorized"


def test_non_json_text_is_truncated():
    assert extract_error_detail(_response(text="x" * 500)) == "x" * 300


def test_empty_body():
    assert extract_error_detail(_response(text="")) == "(empty response body)"
