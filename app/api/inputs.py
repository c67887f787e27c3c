"""
Form input handling shared by the calculator endpoints.

Calculator forms post loosely typed values ("$850,000", "5", "", null).
Everything is coerced here so the calculation engine only ever sees
plain numbers and booleans.
"""

import logging
import math
import re
from typing import Annotated, Any, Dict, Iterable, Optional

from pydantic import BaseModel, BeforeValidator, model_validator

from app.calculations.rates import to_fraction

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^0-9eE+\-.]")

TRUTHY_STRINGS = {"true", "1", "yes", "y", "on"}


def coerce_number(value: Any) -> float:
    """
    Coerce a form value to a finite float.

    Strings keep only digits, sign, decimal point and exponent marker
    before parsing. Anything missing, unparseable or not finite becomes 0.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        cleaned = _NON_NUMERIC.sub("", value)
        if not cleaned:
            return 0.0
        try:
            number = float(cleaned)
        except ValueError:
            logger.debug(f"Could not parse numeric form value {value!r}, using 0")
            return 0.0
    else:
        raise ValueError(f"Expected a number, got {type(value).__name__}")

    return number if math.isfinite(number) else 0.0


def coerce_bool(value: Any) -> bool:
    """Coerce a form checkbox value to a bool."""
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_STRINGS
    return bool(value)


FormNumber = Annotated[float, BeforeValidator(coerce_number)]
FormBool = Annotated[bool, BeforeValidator(coerce_bool)]


class FormModel(BaseModel):
    """
    Base schema for calculator forms.

    Null values are dropped before validation so the field default applies.
    Unknown keys are ignored.
    """

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class RateFormModel(FormModel):
    """Calculator form whose rate fields may be fractions or whole percents."""

    # True: rates are whole percents (1 = 1%). False: fractions (1 = 100%).
    # None: guess per value (anything above 1 is a percent).
    rates_as_percent: Optional[bool] = None

    def to_rate(self, value: float) -> float:
        return to_fraction(value, self.rates_as_percent)

    def to_engine_dict(self, rate_fields: Iterable[str] = ()) -> Dict[str, Any]:
        """Dump form values with rate fields converted to fractions."""
        data = self.model_dump(exclude={"rates_as_percent"})
        for name in rate_fields:
            if data.get(name) is not None:
                data[name] = self.to_rate(data[name])
        return data
