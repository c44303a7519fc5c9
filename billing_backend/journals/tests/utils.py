# journals/tests/utils.py

"""
Shared builders for journal engine tests.

Every builder creates the smallest valid object graph:
facility -> facility account -> product, funding account, order -> order detail
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Permission
from django.utils import timezone

from facilities.models import Facility, FacilityAccount, FundingAccount, Product
from orders.models import Order, OrderDetail

User = get_user_model()


def aware(year: int, month: int, day: int, hour: int = 12) -> datetime:
    return timezone.make_aware(datetime(year, month, day, hour))


def make_user(username: str = "billing", *perms: str):
    user = User.objects.create_user(username=username, password="pass")
    for codename in perms:
        app_label, code = codename.split(".")
        user.user_permissions.add(
            Permission.objects.get(content_type__app_label=app_label, codename=code)
        )
    # has_perm() caches per instance
    return User.objects.get(pk=user.pk)


def make_facility(name: str = "Microscopy Core", abbreviation: str = "MIC") -> Facility:
    return Facility.objects.create(name=name, abbreviation=abbreviation)


def make_product(
    facility: Facility,
    name: str = "Confocal hour",
    revenue_account: str = "REV-100",
    *,
    account_active: bool = True,
) -> Product:
    facility_account = FacilityAccount.objects.filter(
        facility=facility, revenue_account=revenue_account
    ).first()
    if facility_account is None:
        facility_account = FacilityAccount.objects.create(
            facility=facility,
            revenue_account=revenue_account,
            is_active=account_active,
        )
    return Product.objects.create(
        facility=facility, facility_account=facility_account, name=name
    )


def make_funding_account(account_number: str = "FA-1000", **kwargs) -> FundingAccount:
    return FundingAccount.objects.create(account_number=account_number, **kwargs)


def make_order_detail(
    product: Product,
    account: FundingAccount,
    *,
    user,
    total="100.00",
    quantity: int = 1,
    fulfilled_at=None,
    state=OrderDetail.State.COMPLETE,
) -> OrderDetail:
    order = Order.objects.create(facility=product.facility, user=user)
    return OrderDetail.objects.create(
        order=order,
        product=product,
        account=account,
        quantity=quantity,
        total=Decimal(str(total)),
        fulfilled_at=fulfilled_at or aware(2023, 10, 15),
        state=state,
    )
