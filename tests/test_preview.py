"""Tests for specquery.preview."""

from __future__ import annotations

import pytest

from specquery.exceptions import InvalidUsageError
from specquery.models import HTTPMethod, OperationModel, ParameterLocation
from specquery.preview import (
    describe_request,
    find_operation,
    interpolate_path,
    query_key,
    serialize_query,
)


class TestSerializeQuery:
    def test_arrays_repeat_and_none_skipped(self) -> None:
        assert (
            serialize_query({"status": ["available", "pending"], "limit": 10, "q": None})
            == "?status=available&status=pending&limit=10"
        )

    def test_empty(self) -> None:
        assert serialize_query({}) == ""
        assert serialize_query(None) == ""

    def test_all_none(self) -> None:
        assert serialize_query({"a": None, "b": None}) == ""

    def test_empty_array_contributes_nothing(self) -> None:
        assert serialize_query({"tags": [], "page": 2}) == "?page=2"

    def test_js_stringification(self) -> None:
        assert serialize_query({"active": True, "ratio": 2.0, "x": 1.5}) == (
            "?active=true&ratio=2&x=1.5"
        )

    def test_form_encoding(self) -> None:
        assert serialize_query({"q": "a b&c", "path": "/x~y*"}) == "?q=a+b%26c&path=%2Fx%7Ey*"

    def test_order_preserved(self) -> None:
        assert serialize_query({"z": 1, "a": 2}) == "?z=1&a=2"


class TestInterpolatePath:
    def test_required(self, make_operation) -> None:
        assert interpolate_path(make_operation(), {"petId": "42"}) == "/pets/42"

    def test_required_missing_raises(self, make_operation) -> None:
        with pytest.raises(InvalidUsageError, match="petId"):
            interpolate_path(make_operation(), {})

    def test_optional_missing_is_empty(self, make_operation, make_param) -> None:
        op = make_operation(
            path="/docs/{version}",
            parameters=[make_param("version", ParameterLocation.PATH)],
        )
        assert interpolate_path(op, {}) == "/docs/"
        assert interpolate_path(op, {"version": 3}) == "/docs/3"

    def test_no_path_params(self, make_operation) -> None:
        op = make_operation(path="/pets", parameters=[])
        assert interpolate_path(op, {"petId": "ignored"}) == "/pets"


class TestQueryKey:
    def test_without_query(self, make_operation) -> None:
        assert query_key(make_operation()) == ["pets", "getPetById", {}]

    def test_path_params_not_in_key(self, make_operation) -> None:
        # Two different pets share the same key when the query is the same.
        assert query_key(make_operation(), None) == query_key(make_operation(), {})

    def test_with_query(self, make_operation) -> None:
        op = make_operation(operation_id="list-pets", tag="Pet Store", path="/pets", parameters=[])
        assert query_key(op, {"limit": "10"}) == ["petStore", "listPets", {"limit": "10"}]


class TestFindOperation:
    def test_by_id_function_or_hook_name(self, petstore_model: OperationModel) -> None:
        for name in ("getPetById", "useGetPetById"):
            assert find_operation(petstore_model, name).operation_id == "getPetById"

    def test_unknown(self, petstore_model: OperationModel) -> None:
        with pytest.raises(InvalidUsageError, match="Unknown operation: nope"):
            find_operation(petstore_model, "nope")


class TestDescribeRequest:
    def test_query(self, petstore_model: OperationModel) -> None:
        op = find_operation(petstore_model, "listPets")
        assert describe_request(op, {}, {"status": ["available", "sold"], "limit": "5"}) == {
            "hook": "useListPets",
            "kind": "query",
            "method": "GET",
            "path": "/pets?status=available&status=sold&limit=5",
            "query_key": ["pets", "listPets", {"status": ["available", "sold"], "limit": "5"}],
        }

    def test_path_params(self, petstore_model: OperationModel) -> None:
        op = find_operation(petstore_model, "getPetById")
        description = describe_request(op, {"petId": "7"})
        assert description["path"] == "/pets/7"
        assert description["query_key"] == ["pets", "getPetById", {}]

    def test_mutation_has_no_key(self, petstore_model: OperationModel) -> None:
        op = find_operation(petstore_model, "deletePet")
        description = describe_request(op, {"petId": "7"})
        assert description["kind"] == "mutation"
        assert description["method"] == "DELETE"
        assert "query_key" not in description

    def test_head_is_query(self, make_operation) -> None:
        op = make_operation(method=HTTPMethod.HEAD)
        assert describe_request(op, {"petId": "1"})["kind"] == "query"
