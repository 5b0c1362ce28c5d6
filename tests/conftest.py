"""
Shared fixtures: an in-memory store, a service on top of it, and a tiny
stand-in for a Firebase Realtime Database reference.
"""

from __future__ import annotations

import copy
from typing import Any

import pytest

from voucher_repository import InMemoryVoucherRepository
from voucher_service import VoucherService


class FakeDbRef:
    """Dict-backed imitation of firebase_admin.db.Reference (child/get/set/transaction)."""

    def __init__(self, data: dict | None = None, path: tuple[str, ...] = ()) -> None:
        self.data = data if data is not None else {}
        self.path = path
        self.writes: list[tuple[tuple[str, ...], Any]] = []

    def child(self, name: str) -> "FakeDbRef":
        # Same path rules as firebase_admin: no empty or reserved names, "/" nests
        if not name or name.startswith("/"):
            raise ValueError(f"Invalid path argument: {name!r}")
        if any(c in ".$#[]" for c in name):
            raise ValueError(f"Invalid path: {name!r}. Path contains illegal characters.")
        segments = tuple(s for s in name.split("/") if s)
        ref = FakeDbRef(self.data, self.path + segments)
        ref.writes = self.writes
        return ref

    def get(self) -> Any:
        node: Any = self.data
        for key in self.path:
            if not isinstance(node, dict) or key not in node:
                return None
            node = node[key]
        return copy.deepcopy(node)

    def set(self, value: Any) -> None:
        node = self.data
        for key in self.path[:-1]:
            node = node.setdefault(key, {})
        node[self.path[-1]] = copy.deepcopy(value)
        self.writes.append((self.path, value))

    def transaction(self, update):
        new_value = update(self.get())
        self.set(new_value)
        return new_value


@pytest.fixture
def repository() -> InMemoryVoucherRepository:
    return InMemoryVoucherRepository()


@pytest.fixture
def service(repository: InMemoryVoucherRepository) -> VoucherService:
    return VoucherService(repository)


@pytest.fixture
def fake_db() -> FakeDbRef:
    return FakeDbRef()
