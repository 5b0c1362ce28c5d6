"""Voucher service - creation and application of discount vouchers.

Applying a voucher never raises: an unknown code, a used voucher or an
amount below the threshold all come back as `applied=False` with the
amount unchanged.
"""
import logging

from error_utils import conflict_error
from models import ApplyResult, Voucher
from voucher_repository import DUPLICATE_MESSAGE, VoucherRepository

MIN_AMOUNT_FOR_DISCOUNT = 100


class VoucherService:
    def __init__(self, voucher_repository: VoucherRepository):
        self.voucher_repo = voucher_repository
        self.logger = logging.getLogger(__name__)

    def create_voucher(self, code: str, discount: float) -> Voucher:
        """Store a new unused voucher.

        Raises:
            AppError: conflict, if a voucher with this code already exists.
        """
        if self.voucher_repo.get_voucher_by_code(code):
            raise conflict_error(DUPLICATE_MESSAGE)

        voucher = self.voucher_repo.create_voucher(code, discount)
        self.logger.info("Created voucher %s (%s%% off)", voucher.code, voucher.discount)
        return voucher

    def apply_voucher(self, code: str, amount: float) -> ApplyResult:
        """Apply the voucher `code` to `amount`, marking it used when the discount is deducted."""
        voucher = self.voucher_repo.get_voucher_by_code(code)
        if not voucher:
            self.logger.debug("Voucher %s not found", code)
            return ApplyResult(amount=amount, discount=0, finalAmount=amount, applied=False)

        if voucher.used:
            self.logger.debug("Voucher %s already used", code)
            return self._not_applied(voucher, amount)

        if not is_amount_valid_for_discount(amount):
            self.logger.debug("Amount %s too low for voucher %s", amount, code)
            return self._not_applied(voucher, amount)

        # Lost the race against a concurrent apply
        if self.voucher_repo.use_voucher(code) is None:
            self.logger.debug("Voucher %s used concurrently", code)
            return self._not_applied(voucher, amount)

        final_amount = apply_discount(amount, voucher.discount)
        self.logger.info("Applied voucher %s: %s -> %s", code, amount, final_amount)
        return ApplyResult(
            amount=amount,
            discount=voucher.discount,
            finalAmount=final_amount,
            applied=True,
        )

    @staticmethod
    def _not_applied(voucher: Voucher, amount: float) -> ApplyResult:
        return ApplyResult(amount=amount, discount=voucher.discount, finalAmount=amount, applied=False)


def is_amount_valid_for_discount(amount: float) -> bool:
    return amount > MIN_AMOUNT_FOR_DISCOUNT


def apply_discount(amount: float, discount: float) -> float:
    return amount - amount * (discount / 100)
