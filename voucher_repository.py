"""Voucher storage.

Two stores share the `VoucherRepository` contract:

- `InMemoryVoucherRepository`: process-local dict guarded by a lock.
- `FirebaseVoucherRepository`: Realtime Database, one node per code under
  `/vouchers` (keyed by the percent-encoded code), ids drawn from the
  `/voucherSeq` counter.

`use_voucher` is the only mutation after creation. It flips `used` from
False to True atomically and returns the updated voucher, or None when the
voucher is missing or someone else already used it.
"""
import itertools
import logging
import threading
from typing import Dict, Optional, Protocol
from urllib.parse import quote

from firebase_admin import db

from error_utils import conflict_error
from models import Voucher

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Voucher already exist."


class VoucherRepository(Protocol):
    def get_voucher_by_code(self, code: str) -> Optional[Voucher]:
        ...

    def create_voucher(self, code: str, discount: float) -> Voucher:
        ...

    def use_voucher(self, code: str) -> Optional[Voucher]:
        ...


class InMemoryVoucherRepository:
    def __init__(self):
        self._vouchers: Dict[str, Voucher] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def get_voucher_by_code(self, code: str) -> Optional[Voucher]:
        with self._lock:
            voucher = self._vouchers.get(code)
            return voucher.model_copy() if voucher else None

    def create_voucher(self, code: str, discount: float) -> Voucher:
        with self._lock:
            if code in self._vouchers:
                raise conflict_error(DUPLICATE_MESSAGE)
            voucher = Voucher(id=next(self._ids), code=code, discount=discount, used=False)
            self._vouchers[code] = voucher
            return voucher.model_copy()

    def use_voucher(self, code: str) -> Optional[Voucher]:
        with self._lock:
            voucher = self._vouchers.get(code)
            if voucher is None or voucher.used:
                return None
            voucher.used = True
            return voucher.model_copy()


class _Abort(Exception):
    """Raised inside a transaction function to leave the node untouched."""


class FirebaseVoucherRepository:
    """Vouchers in the Realtime Database.

    Creation and use-marking run as `Reference.transaction()` calls, which
    retry on concurrent modification, so the `used` flag and the code
    uniqueness hold across app instances sharing the same database.
    """

    def __init__(self, db_ref=None):
        if db_ref is None:
            from firebase_util import get_db_ref
            db_ref = get_db_ref()
        self._root = db_ref

    def _voucher_ref(self, code: str):
        return self._root.child("vouchers").child(voucher_key(code))

    def get_voucher_by_code(self, code: str) -> Optional[Voucher]:
        data = self._voucher_ref(code).get()
        if not data:
            return None
        return Voucher(**data)

    def _next_id(self) -> int:
        return self._root.child("voucherSeq").transaction(lambda current: (current or 0) + 1)

    def create_voucher(self, code: str, discount: float) -> Voucher:
        voucher_id = self._next_id()
        data = {"id": voucher_id, "code": code, "discount": discount, "used": False}

        def insert(current):
            if current:
                raise _Abort()
            return data

        try:
            stored = self._voucher_ref(code).transaction(insert)
        except _Abort:
            logger.info("Voucher %s was created concurrently, id %s discarded", code, voucher_id)
            raise conflict_error(DUPLICATE_MESSAGE) from None
        return Voucher(**stored)

    def use_voucher(self, code: str) -> Optional[Voucher]:
        def mark_used(current):
            if not current or current.get("used"):
                raise _Abort()
            return {**current, "used": True}

        try:
            stored = self._voucher_ref(code).transaction(mark_used)
        except _Abort:
            return None
        except db.TransactionAbortedError:
            logger.warning("Gave up marking voucher %s used after repeated contention", code)
            return None
        return Voucher(**stored)


def voucher_key(code: str) -> str:
    """Database key for `code`.

    Realtime Database keys may not contain `. $ # [ ] /`; percent-encoding
    maps every code to a distinct legal key. "%" alone never comes out of
    `quote`, so it stands for the empty code.
    """
    return quote(code, safe="").replace(".", "%2E") or "%"
