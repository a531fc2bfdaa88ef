"""Unit tests for the ApiError / ApiResponse envelope models."""

from __future__ import annotations

import pytest
from pydantic import BaseModel, ValidationError

from api_response.models.errors import ApiError
from api_response.models.responses import ApiResponse


class Widget(BaseModel):
    name: str
    size_cm: int


# ---------------------------------------------------------------------------
# ApiError
# ---------------------------------------------------------------------------


class TestApiError:
    def test_message_only(self):
        err = ApiError(message="Something went wrong")
        assert err.message == "Something went wrong"
        assert err.code is None
        assert err.field is None
        assert err.meta is None

    def test_all_fields(self):
        err = ApiError(
            message="Must be positive", code="out_of_range", field="qty", meta={"min": 1}
        )
        assert err.code == "out_of_range"
        assert err.field == "qty"
        assert err.meta == {"min": 1}

    def test_missing_message_raises(self):
        with pytest.raises(ValidationError):
            ApiError()  # type: ignore[call-arg]

    def test_none_message_raises(self):
        with pytest.raises(ValidationError):
            ApiError(message=None)  # type: ignore[arg-type]

    def test_empty_message_raises(self):
        with pytest.raises(ValidationError):
            ApiError(message="")

    def test_is_immutable(self):
        err = ApiError(message="x")
        with pytest.raises(ValidationError):
            err.message = "y"  # type: ignore[misc]

    def test_wire_field_order(self):
        err = ApiError(message="bad", code="E1")
        assert list(err.model_dump(by_alias=True)) == ["code", "message", "field", "meta"]


# ---------------------------------------------------------------------------
# ApiResponse factories
# ---------------------------------------------------------------------------


class TestOk:
    def test_defaults(self):
        resp = ApiResponse.ok({"key": "value"})
        assert resp.success is True
        assert resp.data == {"key": "value"}
        assert resp.message is None
        assert resp.errors is None
        assert resp.meta is None
        assert resp.code == 200

    def test_overrides(self):
        resp = ApiResponse.ok([1, 2], message="Created", meta={"request_id": "abc"}, code=201)
        assert resp.message == "Created"
        assert resp.meta == {"request_id": "abc"}
        assert resp.code == 201

    def test_none_data_is_allowed(self):
        resp = ApiResponse.ok(None)
        assert resp.success is True
        assert resp.data is None

    def test_explicit_null_code(self):
        assert ApiResponse.ok("x", code=None).code is None

    def test_generic_with_string_data(self):
        resp = ApiResponse[str].ok("hello")
        assert resp.data == "hello"

    def test_generic_with_list_data(self):
        resp = ApiResponse[list[int]].ok([1, 2, 3])
        assert resp.data == [1, 2, 3]

    def test_generic_rejects_wrong_type(self):
        with pytest.raises(ValidationError):
            ApiResponse[int].ok("not a number")


class TestNoContent:
    def test_defaults(self):
        resp = ApiResponse.no_content()
        assert resp.success is True
        assert resp.data is None
        assert resp.errors is None
        assert resp.meta is None
        assert resp.code == 204

    def test_overrides(self):
        resp = ApiResponse.no_content(message="Deleted", code=200)
        assert resp.message == "Deleted"
        assert resp.code == 200
        assert resp.data is None


class TestFail:
    def test_from_list(self):
        errors = [ApiError(message="a"), ApiError(message="b", field="name")]
        resp = ApiResponse.fail(errors, message="Invalid")
        assert resp.success is False
        assert resp.data is None
        assert resp.errors == errors
        assert resp.message == "Invalid"
        assert resp.code == 400

    def test_from_single_error(self):
        err = ApiError(message="Not found", code="not_found")
        resp = ApiResponse.fail(err, code=404)
        assert resp.errors == [err]
        assert resp.code == 404

    def test_single_equals_list_form(self):
        err = ApiError(message="boom", code="E")
        assert ApiResponse.fail(err, "m", 409) == ApiResponse.fail([err], "m", 409)

    def test_from_tuple(self):
        err = ApiError(message="x")
        assert ApiResponse.fail((err,)).errors == [err]

    def test_none_errors_raises(self):
        with pytest.raises(TypeError):
            ApiResponse.fail(None)  # type: ignore[arg-type]

    def test_empty_errors_raises(self):
        with pytest.raises(ValueError):
            ApiResponse.fail([])


# ---------------------------------------------------------------------------
# Immutability and serialization
# ---------------------------------------------------------------------------


class TestSerialization:
    def test_is_immutable(self):
        resp = ApiResponse.ok(1)
        with pytest.raises(ValidationError):
            resp.success = False  # type: ignore[misc]

    def test_to_wire_has_all_keys_in_order(self):
        wire = ApiResponse.ok({"a": 1}).to_wire()
        assert list(wire) == ["success", "message", "data", "errors", "meta", "code"]
        assert wire == {
            "success": True,
            "message": None,
            "data": {"a": 1},
            "errors": None,
            "meta": None,
            "code": 200,
        }

    def test_to_wire_failure(self):
        wire = ApiResponse.fail(ApiError(message="bad", code="E1", field="f")).to_wire()
        assert wire["errors"] == [
            {"code": "E1", "message": "bad", "field": "f", "meta": None}
        ]
        assert wire["data"] is None

    def test_to_wire_serializes_nested_models(self):
        wire = ApiResponse.ok(Widget(name="bolt", size_cm=3)).to_wire()
        assert wire["data"] == {"name": "bolt", "size_cm": 3}

    def test_round_trip_through_camel_case_json(self):
        resp = ApiResponse[dict].ok({"items": [1, 2, 3]}, meta={"page": 1})
        json_str = resp.model_dump_json(by_alias=True)
        restored = ApiResponse[dict].model_validate_json(json_str)
        assert restored == resp
