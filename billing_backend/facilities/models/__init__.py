# facilities/models/__init__.py

"""
FACILITIES MODELS PACKAGE EXPORTS

Keep this file imports-only.
"""

from facilities.models.facility import Facility
from facilities.models.facility_account import FacilityAccount
from facilities.models.funding_account import FundingAccount
from facilities.models.product import Product

__all__ = [
    "Facility",
    "FacilityAccount",
    "FundingAccount",
    "Product",
]
