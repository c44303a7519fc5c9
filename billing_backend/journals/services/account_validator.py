# journals/services/account_validator.py

"""
======================================================
PATH: journals/services/account_validator.py
======================================================
ACCOUNT VALIDATOR

Answers ONE question:
"Is this funding account open for this product?"

The answer is a value (AccountCheck), never an exception, so the journal
engine decides when a rejection aborts a batch.

Pluggable:
- settings.JOURNAL_ACCOUNT_VALIDATOR holds the dotted path of the class
- the class must implement is_account_open(account_number, product)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.conf import settings
from django.utils import timezone
from django.utils.module_loading import import_string

from facilities.models import FundingAccount

logger = logging.getLogger(__name__)

DEFAULT_VALIDATOR = "journals.services.account_validator.FundingAccountValidator"


@dataclass(frozen=True)
class AccountCheck:
    is_open: bool
    reason: str = ""

    @classmethod
    def open(cls) -> "AccountCheck":
        return cls(is_open=True)

    @classmethod
    def closed(cls, reason: str) -> "AccountCheck":
        return cls(is_open=False, reason=reason)


class AccountValidator:
    def is_account_open(self, account_number: str, product) -> AccountCheck:
        raise NotImplementedError


class FundingAccountValidator(AccountValidator):
    """
    Validates against local FundingAccount records:
    - account must exist
    - not suspended, not expired
    - product must be able to receive the revenue (active facility account)
    """

    def is_account_open(self, account_number: str, product) -> AccountCheck:
        account = FundingAccount.objects.filter(account_number=account_number).first()
        if account is None:
            return AccountCheck.closed("was not found")

        if account.is_suspended:
            return AccountCheck.closed("is suspended")

        now = timezone.now()
        if account.is_expired(now):
            return AccountCheck.closed(
                f"expired on {timezone.localdate(account.expires_at).isoformat()}"
            )

        facility_account = getattr(product, "facility_account", None)
        if facility_account is None or not facility_account.is_active:
            return AccountCheck.closed(
                f"cannot be charged for {product}: no active revenue account"
            )

        return AccountCheck.open()


def get_account_validator() -> AccountValidator:
    path = getattr(settings, "JOURNAL_ACCOUNT_VALIDATOR", "") or DEFAULT_VALIDATOR
    validator_class = import_string(path)
    logger.debug("Using account validator", extra={"validator": path})
    return validator_class()
