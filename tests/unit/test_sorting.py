"""Tests for the sort resolver."""

from __future__ import annotations

from datetime import date

import pytest

from usermanagement.core.types import SortDirection, SortField
from usermanagement.query.sorting import DEFAULT_SORT, SortSpec, resolve_sort, sort_records

from tests.factories import UserFactory


class TestResolveSort:
    @pytest.mark.parametrize("sort_by", [None, "", "   ", "password_hash", "DROP TABLE", 42, ["firstName"]])
    def test_unknown_keys_fall_back_to_created_at(self, sort_by):
        spec = resolve_sort(sort_by, "asc")
        assert spec.field is SortField.CREATED_AT

    @pytest.mark.parametrize("sort_by", ["firstName", "FIRSTNAME", " firstname "])
    def test_keys_are_case_insensitive(self, sort_by):
        assert resolve_sort(sort_by).field is SortField.FIRST_NAME

    @pytest.mark.parametrize("direction", [None, "", "desc", "DESC", "sideways", 1])
    def test_anything_but_asc_is_descending(self, direction):
        assert resolve_sort("lastName", direction).descending is True

    @pytest.mark.parametrize("direction", ["asc", "ASC", " Asc "])
    def test_asc(self, direction):
        spec = resolve_sort("lastName", direction)
        assert spec.descending is False
        assert spec.direction is SortDirection.ASC

    def test_default(self):
        assert resolve_sort() == DEFAULT_SORT
        assert DEFAULT_SORT.direction is SortDirection.DESC


class TestSortRecords:
    def test_first_name_ascending_is_case_insensitive(self):
        users = [UserFactory(first_name=n) for n in ("bob", "Alice", "carla", "Bea")]
        ordered = sort_records(users, resolve_sort("firstName", "asc"))
        names = [u.first_name.lower() for u in ordered]
        assert names == sorted(names)
        assert [u.first_name for u in ordered] == ["Alice", "Bea", "bob", "carla"]

    def test_default_is_newest_first(self):
        users = UserFactory.build_batch(5)
        ordered = sort_records(users, resolve_sort(None, None))
        created = [u.created_at for u in ordered]
        assert created == sorted(created, reverse=True)

    def test_invalid_direction_with_default_key_is_newest_first(self):
        users = UserFactory.build_batch(3)
        ordered = sort_records(users, resolve_sort("nope", "bogus"))
        assert ordered == list(reversed(users))

    def test_role_name(self):
        users = [UserFactory(role_name=r) for r in ("User", "admin", "Manager")]
        ordered = sort_records(users, resolve_sort("roleName", "asc"))
        assert [u.role_name for u in ordered] == ["admin", "Manager", "User"]

    def test_date_of_birth_descending(self):
        users = [UserFactory(date_of_birth=date(y, 1, 1)) for y in (1990, 2000, 1980)]
        ordered = sort_records(users, SortSpec(SortField.DATE_OF_BIRTH, descending=True))
        assert [u.date_of_birth.year for u in ordered] == [2000, 1990, 1980]

    def test_ties_keep_input_order(self):
        users = [UserFactory(gender="Male") for _ in range(4)]
        ordered = sort_records(users, resolve_sort("gender", "desc"))
        assert ordered == users
