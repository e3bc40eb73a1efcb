"""
Employee identity numbers.

Fiscal numbers are validated with the check-digit rule of their country
(Brazilian CPF, Portuguese NIF). The Portuguese social security number
(NISS) is validated by shape only.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict

from hr_admin.core.errors import InvalidInputError, Result

NISS_PATTERN = re.compile(r"^[12][0-9]{10}$")


def _mod11_digit(digits: str, start_weight: int) -> int:
    total = sum(int(d) * (start_weight - i) for i, d in enumerate(digits))
    check = 11 - (total % 11)
    return 0 if check >= 10 else check


def validate_cpf(value: str) -> bool:
    if not value or len(value) != 11 or not value.isdigit():
        return False
    return (
        _mod11_digit(value[:9], 10) == int(value[9])
        and _mod11_digit(value[:10], 11) == int(value[10])
    )


def format_cpf(value: str) -> str:
    if not value or len(value) != 11:
        return value
    return f"{value[:3]}.{value[3:6]}.{value[6:9]}-{value[9:]}"


def mask_cpf(value: str) -> str:
    if not value or len(value) != 11:
        return value
    return f"***.***.***-{value[9:]}"


def validate_nif(value: str) -> bool:
    if not value or len(value) != 9 or not value.isdigit():
        return False
    return _mod11_digit(value[:8], 9) == int(value[8])


def format_nif(value: str) -> str:
    if not value or len(value) != 9:
        return value
    return f"{value[:3]} {value[3:6]} {value[6:]}"


def mask_nif(value: str) -> str:
    if not value or len(value) != 9:
        return value
    return f"***-***-{value[7:]}"


@dataclass(frozen=True)
class FiscalNumberRule:
    validate: Callable[[str], bool]
    format: Callable[[str], str]
    mask: Callable[[str], str]


FISCAL_NUMBER_RULES: Dict[str, FiscalNumberRule] = {
    "BR": FiscalNumberRule(validate_cpf, format_cpf, mask_cpf),
    "PT": FiscalNumberRule(validate_nif, format_nif, mask_nif),
}


def register_country(country: str, rule: FiscalNumberRule) -> None:
    FISCAL_NUMBER_RULES[country.upper()] = rule


def validate_fiscal_number(country: str, value: str) -> Result[str]:
    """Normalised fiscal number, or the reason it was rejected."""
    rule = FISCAL_NUMBER_RULES.get((country or "").upper())
    if rule is None:
        return Result.failure(InvalidInputError(f"Unsupported country code: {country}"))

    clean = re.sub(r"[\s.\-]", "", value or "")
    if not rule.validate(clean):
        return Result.failure(InvalidInputError(f"Invalid fiscal number for {country.upper()}: {value}"))
    return Result.success(clean)


def validate_niss(value: str) -> Result[str]:
    if value is None or not value.strip():
        return Result.failure(InvalidInputError("NISS cannot be null or empty"))

    clean = re.sub(r"\s+", "", value)
    if len(clean) != 11:
        return Result.failure(InvalidInputError("NISS must contain exactly 11 digits"))
    if not NISS_PATTERN.match(clean):
        return Result.failure(InvalidInputError("NISS must start with 1 or 2 and contain only digits"))
    return Result.success(clean)


def format_niss(value: str) -> str:
    return f"{value[:3]} {value[3:6]} {value[6:9]} {value[9:]}"


def mask_niss(value: str) -> str:
    return f"{value[:3]} {value[3:6]} {value[6:9]} **"
