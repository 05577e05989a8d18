# herd/models/__init__.py

from .cow import Cow as Cow
from .disposition import CowDisposition as CowDisposition
from .monthly_depreciation import MonthlyDepreciation as MonthlyDepreciation

__all__ = ["Cow", "MonthlyDepreciation", "CowDisposition"]
