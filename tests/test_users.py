"""
Tests for active-user decoding and role derivation.
"""

import pytest

from ignition.database import MockDatabase
from ignition.exceptions import DatabaseError, RecordDecodeError
from ignition.schemas import RawUserRecord, User
from ignition.users import (
    build_active_users_query,
    decode_user_record,
    determine_additional_roles,
    extract_user_roles,
    fetch_active_users,
    has_purchase_history,
    is_admin_user,
    process_user_data,
)


def _raw(**overrides):
    record = {"id": 1, "name": "Test", "roles": "user", "permissions": [], "totalPurchases": 0}
    record.update(overrides)
    return record


class TestDecodeUserRecord:

    def test_decodes_camel_case_purchases(self):
        record = decode_user_record(_raw(totalPurchases=3))
        assert isinstance(record, RawUserRecord)
        assert record.total_purchases == 3

    def test_optional_fields_default(self):
        record = decode_user_record({"id": 7, "name": "Min", "roles": "guest"})
        assert record.permissions == []
        assert record.total_purchases == 0
        assert record.status == "active"

    def test_extra_fields_ignored(self):
        record = decode_user_record(_raw(email="t@example.com"))
        assert not hasattr(record, "email")

    def test_missing_roles(self):
        raw = {"id": 1, "name": "Test"}
        with pytest.raises(RecordDecodeError) as exc_info:
            decode_user_record(raw)
        assert exc_info.value.record == raw
        assert "roles" in exc_info.value.reason

    def test_wrong_type(self):
        with pytest.raises(RecordDecodeError):
            decode_user_record(_raw(permissions=None))

    def test_decode_error_is_database_error(self):
        with pytest.raises(DatabaseError):
            decode_user_record("not a record")


class TestRoles:

    def test_admin_without_purchases(self):
        record = decode_user_record(_raw(roles="a,b", permissions=["admin"], totalPurchases=0))
        assert extract_user_roles(record) == ["a", "b", "admin"]

    def test_customer_without_admin(self):
        record = decode_user_record(_raw(roles="a,b", permissions=[], totalPurchases=5))
        assert extract_user_roles(record) == ["a", "b", "customer"]

    def test_admin_before_customer(self):
        record = decode_user_record(_raw(permissions=["write", "admin"], totalPurchases=1))
        assert determine_additional_roles(record) == ["admin", "customer"]

    def test_no_additional_roles(self):
        record = decode_user_record(_raw())
        assert determine_additional_roles(record) == []
        assert extract_user_roles(record) == ["user"]

    def test_predicates(self):
        record = decode_user_record(_raw(permissions=["admin"], totalPurchases=0))
        assert is_admin_user(record) is True
        assert has_purchase_history(record) is False

    def test_base_roles_not_deduplicated(self):
        record = decode_user_record(_raw(roles="admin", permissions=["admin"]))
        assert extract_user_roles(record) == ["admin", "admin"]


class TestProcessUserData:

    def test_maps_records_in_order(self):
        users = process_user_data([
            _raw(id=2, name="B", roles="a,b", permissions=["admin"]),
            _raw(id=1, name="A", roles="x", totalPurchases=5),
        ])
        assert users == [
            User(id=2, name="B", roles=["a", "b", "admin"]),
            User(id=1, name="A", roles=["x", "customer"]),
        ]

    def test_empty(self):
        assert process_user_data([]) == []

    def test_bad_record_raises(self):
        with pytest.raises(RecordDecodeError):
            process_user_data([_raw(), {"id": "nope"}])


def test_active_users_query():
    assert build_active_users_query() == 'SELECT * FROM users WHERE status = "active"'


@pytest.mark.asyncio
async def test_fetch_active_users():
    db = MockDatabase()
    await db.connect("http://x")

    users = await fetch_active_users(db)

    assert users == [User(id=1, name="Test", roles=["user"])]
    assert db.queries == [build_active_users_query()]
