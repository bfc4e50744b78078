"""Tests for specquery.emit.hooks."""

from __future__ import annotations

import re

from specquery.emit import render_hooks_by_tag, render_hooks_combined
from specquery.models import GroupedOperations, HTTPMethod, OperationModel, RequestBody
from specquery.grouping import group_by_tag

_HOOK_RE = re.compile(r"^export const (use\w+) = ", re.MULTILINE)


def _hook_block(text: str, name: str) -> str:
    """The source of one exported hook, up to the next export or end of file."""
    start = text.index(f"export const {name} = ")
    end = text.find("\nexport const ", start + 1)
    return text[start:] if end == -1 else text[start:end]


class TestHooksByTag:
    def test_one_hook_per_operation(self, petstore_grouped: GroupedOperations) -> None:
        text = render_hooks_by_tag("pets", petstore_grouped["pets"])
        assert _HOOK_RE.findall(text) == [
            "useListPets",
            "useCreatePet",
            "useGetPetById",
            "useUpdatePet",
            "useDeletePet",
        ]

    def test_imports_from_parent_directory(self, petstore_grouped: GroupedOperations) -> None:
        text = render_hooks_by_tag("pets", petstore_grouped["pets"])
        assert text.startswith("// GENERATED FILE\n")
        assert "import { useQuery, useMutation } from '@tanstack/react-query';" in text
        assert "import { createClient } from '../client.js';" in text
        assert "import { queryKeys } from '../queryKeys.js';" in text
        assert "import type { ApiError } from '../client.js';" in text

    def test_serialize_query_helper_inlined(self, petstore_grouped: GroupedOperations) -> None:
        text = render_hooks_by_tag("store", petstore_grouped["store"])
        assert "const serializeQuery = (input?: Record<string, unknown>) => {" in text
        assert "searchParams.append(key, String(item))" in text
        assert "const client = createClient();" in text


class TestQueryHooks:
    def test_query_key_excludes_path_params(self, petstore_grouped: GroupedOperations) -> None:
        block = _hook_block(
            render_hooks_by_tag("pets", petstore_grouped["pets"]), "useGetPetById"
        )
        assert "useQuery<TData, ApiError>({" in block
        assert "queryKey: queryKeys.pets.getPetById(params?.query)," in block

    def test_request(self, petstore_grouped: GroupedOperations) -> None:
        block = _hook_block(
            render_hooks_by_tag("pets", petstore_grouped["pets"]), "useGetPetById"
        )
        assert "const requestPath = `/pets/${params?.path?.petId}`;" in block
        assert "const search = serializeQuery(params?.query);" in block
        assert "client.request<TData>('GET', requestPath + search, {" in block
        assert "queryFn: async ({ signal }) =>" in block
        assert "        signal,\n" in block

    def test_response_type_default(self, petstore_grouped: GroupedOperations) -> None:
        text = render_hooks_by_tag("pets", petstore_grouped["pets"])
        assert "export const useListPets = <TData = any[]>(" in text
        assert "export const useGetPetById = <TData = Record<string, any>>(" in text

    def test_options_spread_last(self, petstore_grouped: GroupedOperations) -> None:
        block = _hook_block(
            render_hooks_by_tag("pets", petstore_grouped["pets"]), "useListPets"
        )
        assert block.rstrip().endswith("...options,\n  });")

    def test_head_is_a_query(self, make_operation) -> None:
        op = make_operation(operation_id="headPet", method=HTTPMethod.HEAD)
        text = render_hooks_by_tag("pets", [op])
        assert "useQuery<TData, ApiError>" in text
        assert "client.request<TData>('HEAD'" in text


class TestMutationHooks:
    def test_body_and_path(self, petstore_grouped: GroupedOperations) -> None:
        block = _hook_block(
            render_hooks_by_tag("pets", petstore_grouped["pets"]), "useUpdatePet"
        )
        assert "useMutation<TData, ApiError, {" in block
        assert "mutationFn: async ({ path, query, headers, body }) => {" in block
        assert "const requestPath = `/pets/${path?.petId}`;" in block
        assert "client.request<TData>('PUT', requestPath + search, {" in block
        assert "body: body === undefined ? undefined : JSON.stringify(body)," in block
        assert "retry: false," in block

    def test_no_body(self, petstore_grouped: GroupedOperations) -> None:
        block = _hook_block(
            render_hooks_by_tag("pets", petstore_grouped["pets"]), "useDeletePet"
        )
        assert "mutationFn: async ({ path, query, headers }) => {" in block
        assert "JSON.stringify" not in block
        assert "headers?: { 'X-Request-Id'?: string };" in block
        assert "headers: headers ? { ...headers } : undefined," in block

    def test_mutations_have_no_query_key(self, petstore_grouped: GroupedOperations) -> None:
        block = _hook_block(
            render_hooks_by_tag("pets", petstore_grouped["pets"]), "useCreatePet"
        )
        assert "queryKey" not in block
        assert "client.request<TData>('POST', requestPath + search, {" in block
        assert "const requestPath = '/pets';" in block

    def test_patch_with_body(self, make_operation) -> None:
        op = make_operation(
            operation_id="patchPet",
            method=HTTPMethod.PATCH,
            request_body=RequestBody(content_type="application/merge-patch+json"),
        )
        block = _hook_block(render_hooks_by_tag("pets", [op]), "usePatchPet")
        assert "  body?: any;" in block
        assert "'PATCH'" in block


class TestCombinedHooks:
    def test_imports_from_same_directory(self, petstore_grouped: GroupedOperations) -> None:
        text = render_hooks_combined(petstore_grouped)
        assert "import { createClient } from './client.js';" in text
        assert "import { queryKeys } from './queryKeys.js';" in text

    def test_same_hooks_as_grouped(self, petstore_grouped: GroupedOperations) -> None:
        combined = _HOOK_RE.findall(render_hooks_combined(petstore_grouped))
        per_tag = [
            name
            for tag, ops in petstore_grouped.items()
            for name in _HOOK_RE.findall(render_hooks_by_tag(tag, ops))
        ]
        assert combined == per_tag
        assert len(combined) == sum(len(ops) for ops in petstore_grouped.values())

    def test_hook_bodies_identical(self, petstore_grouped: GroupedOperations) -> None:
        combined = render_hooks_combined(petstore_grouped)
        per_tag = render_hooks_by_tag("store", petstore_grouped["store"])
        for name in ("useGetInventory", "usePlaceOrder"):
            assert _hook_block(combined, name).strip() == _hook_block(per_tag, name).strip()

    def test_key_factory_uses_tag_namespace(self, make_operation) -> None:
        grouped = group_by_tag(
            OperationModel(operations=[make_operation(operation_id="get-user", tag="user accounts")])
        )
        text = render_hooks_combined(grouped)
        assert "queryKey: queryKeys.userAccounts.getUser(params?.query)," in text

    def test_empty(self) -> None:
        text = render_hooks_combined({})
        assert _HOOK_RE.findall(text) == []
        assert "const serializeQuery" in text
