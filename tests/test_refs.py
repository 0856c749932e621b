"""Tests for $ref classification and target resolution."""

from __future__ import annotations

import pytest

from schema_graph.refs import (
    external_node_id,
    get_ref,
    is_external_ref,
    parse_ref,
    ref_target_id,
)


class TestIsExternalRef:
    def test_local_pointer(self):
        assert is_external_ref("#/components/schemas/Pet") is False

    @pytest.mark.parametrize(
        "ref",
        [
            "common.yml#/components/schemas/User",
            "./models/user.json",
            "https://example.com/schemas.yaml#/Pet",
            "#Pet",
        ],
    )
    def test_external(self, ref):
        assert is_external_ref(ref) is True


class TestParseRef:
    def test_file_and_fragment(self):
        assert parse_ref("common.yml#/components/schemas/User") == ("common.yml", "User")

    def test_nested_file_path(self):
        assert parse_ref("../../shared/v2/types.yaml#/Money") == ("types.yaml", "Money")

    def test_url(self):
        ref = "https://example.com/api/schemas.yaml#/components/schemas/Pet"
        assert parse_ref(ref) == ("schemas.yaml", "Pet")

    def test_no_fragment(self):
        assert parse_ref("./models/user.json") == ("./models/user.json", "Unknown")

    def test_only_first_hash_splits(self):
        assert parse_ref("a.yml#/x#y/Z") == ("a.yml", "Z")

    def test_empty_segments_fall_back_to_raw(self):
        assert parse_ref("dir/#/schemas/") == ("dir/", "/schemas/")
        assert parse_ref("common.yml#") == ("common.yml", "")


class TestRefTargetId:
    def test_internal(self):
        assert ref_target_id("#/components/schemas/Pet") == "Pet"

    def test_internal_trailing_slash(self):
        assert ref_target_id("#/components/schemas/") == "#/components/schemas/"

    def test_external(self):
        ref = "common.yml#/components/schemas/User"
        assert ref_target_id(ref) == "common.yml#User"
        assert external_node_id(ref) == "common.yml#User"

    def test_external_without_fragment(self):
        assert ref_target_id("user.json") == "user.json#Unknown"


class TestGetRef:
    def test_ref_present(self):
        assert get_ref({"$ref": "#/a/B"}) == "#/a/B"

    @pytest.mark.parametrize(
        "schema",
        [None, "string", ["$ref"], {}, {"$ref": ""}, {"$ref": 7}, {"type": "object"}],
    )
    def test_not_a_ref(self, schema):
        assert get_ref(schema) is None
