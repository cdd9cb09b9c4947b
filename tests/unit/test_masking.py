"""Tests for runtime masking of sensitive fields."""

import json
from dataclasses import dataclass, field
from typing import List

from pydantic import BaseModel

from logleak.masking import (
    CIRCULAR_REFERENCE,
    MASK_VALUE,
    is_sensitive_field,
    mask_and_serialize,
)


@dataclass
class Account:
    username: str
    password: str
    tags: List[str] = field(default_factory=list)


class Customer(BaseModel):
    name: str
    creditCardNumber: str


class Session:
    def __init__(self, user, auth_token):
        self.user = user
        self.auth_token = auth_token


class TestIsSensitiveField:
    """Test field name matching."""

    def test_substring_ignores_case(self):
        assert is_sensitive_field("userPassword", ["password"])
        assert is_sensitive_field("API_KEY", ["api_key"])
        assert not is_sensitive_field("username", ["password"])


class TestMaskAndSerialize:
    """Test masking of supported object shapes."""

    def test_none(self):
        assert mask_and_serialize(None) == "null"

    def test_scalars(self):
        assert mask_and_serialize("plain") == '"plain"'
        assert mask_and_serialize(42) == "42"

    def test_mapping(self):
        data = json.loads(mask_and_serialize({"user": "alice", "password": "hunter2"}))

        assert data == {"user": "alice", "password": MASK_VALUE}

    def test_nested_dataclass(self):
        account = Account("alice", "hunter2", ["admin"])

        data = json.loads(mask_and_serialize({"account": account}))

        assert data == {
            "account": {"username": "alice", "password": MASK_VALUE, "tags": ["admin"]}
        }

    def test_pydantic_model(self):
        data = json.loads(mask_and_serialize(Customer(name="Bob", creditCardNumber="4111")))

        assert data == {"name": "Bob", "creditCardNumber": MASK_VALUE}

    def test_plain_object(self):
        data = json.loads(mask_and_serialize(Session("alice", "abc")))

        assert data == {"user": "alice", "auth_token": MASK_VALUE}

    def test_sequences_and_sets(self):
        data = json.loads(mask_and_serialize([{"ssn": "1"}, ("a",), {"b"}]))

        assert data == [{"ssn": MASK_VALUE}, ["a"], ["b"]]

    def test_circular_reference(self):
        node = {"name": "root"}
        node["self"] = node

        data = json.loads(mask_and_serialize(node))

        assert data == {"name": "root", "self": CIRCULAR_REFERENCE}

    def test_custom_patterns(self):
        data = json.loads(mask_and_serialize({"email": "a@b.c", "password": "x"}, ["email"]))

        assert data == {"email": MASK_VALUE, "password": "x"}

    def test_output_indented(self):
        assert mask_and_serialize({"a": 1}) == '{\n  "a": 1\n}'

    def test_shared_object_is_not_circular(self):
        shared = {"id": 1}

        data = json.loads(mask_and_serialize([shared, shared]))

        assert data == [{"id": 1}, {"id": 1}]

    def test_non_string_keys(self):
        data = json.loads(mask_and_serialize({("a", 1): "x", 2: "y", "token": "z"}))

        assert data == {"('a', 1)": "x", "2": "y", "token": MASK_VALUE}
