"""
Adapter: BuiltinRuleLibrary
Implementuje port RuleLibrary — wbudowane predykaty walidacyjne.

Każdy predykat ma sygnaturę (value, param, all_values) -> bool.
Predykaty NIE obsługują pustych wartości (poza `required`); skrót
"pusta wartość = reguła spełniona" stosuje RuleExecutor.

Koercje tekstu i liczb odwzorowują semantykę skryptową formularzy:
  to_text(True) == "true", to_text(5.0) == "5", to_text([1, 2]) == "1,2"
  to_number("") == 0, to_number(" 0x1F ") == 31, to_number("abc") -> nan
"""
from __future__ import annotations

import json
import math
import numbers
import re
from datetime import date, datetime, timezone
from decimal import Decimal
from email.utils import parsedate_to_datetime
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit

from contracts import FileList, ValueMap
from errors import ConfigurationError
from ports.rule_library import Predicate, RuleEntry

# ──────────────────────────────────────────────────────────────────────────────
# Koercje
# ──────────────────────────────────────────────────────────────────────────────

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_RADIX_RE = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)", re.ASCII)


def is_empty(value: Any) -> bool:
    """None, pusty string (po strip), pusta lista/krotka, pusta FileList."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def to_text(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else to_text(item) for item in value)
    return str(value)


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except OverflowError:
        # int zbyt duży dla float
        return math.inf if value > 0 else -math.inf
    except ValueError:
        # Decimal("sNaN")
        return math.nan


def to_number(value: Any) -> float:
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (numbers.Real, Decimal)):
        return _as_float(value)
    if not isinstance(value, (str, list, tuple)):
        return math.nan

    text = to_text(value).strip()
    if text == "":
        return 0.0
    if _DECIMAL_RE.fullmatch(text):
        return float(text)
    if _RADIX_RE.fullmatch(text):
        return _as_float(int(text, 0))
    if text in ("Infinity", "+Infinity"):
        return math.inf
    if text == "-Infinity":
        return -math.inf
    return math.nan


def luhn_check(number: Any) -> bool:
    """Suma kontrolna Luhna po odrzuceniu wszystkich nie-cyfr."""
    digits = re.sub(r"[^0-9]", "", to_text(number))
    total = 0
    double = False
    for ch in reversed(digits):
        d = int(ch)
        if double:
            d *= 2
            if d > 9:
                d -= 9
        total += d
        double = not double
    return total % 10 == 0


# Formaty zapasowe dla dat nie-ISO (kolejność ma znaczenie)
_DATE_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%Y/%m/%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def _parse_date_text(text: str) -> Optional[datetime]:
    if not text:
        return None
    iso = text[:-1] + "+00:00" if text[-1] in "Zz" else text
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        return None


def parse_date(value: Any) -> Optional[datetime]:
    """
    Zwraca naiwny datetime (strefy sprowadzone do UTC) lub None.
    Liczby traktowane są jak znacznik czasu w milisekundach.
    """
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime(value.year, value.month, value.day)
    elif isinstance(value, numbers.Real) and not isinstance(value, bool):
        try:
            result = datetime.fromtimestamp(float(value) / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    else:
        result = _parse_date_text(to_text(value).strip())
        if result is None:
            return None
    if result.tzinfo is not None:
        result = result.astimezone(timezone.utc).replace(tzinfo=None)
    return result


# Parametry in / notIn / fileType podane jako kolekcja zamiast "a, b, c"
CHOICE_TYPES = (list, tuple, set, frozenset)


def _choices(param: Any) -> list[Any]:
    if isinstance(param, CHOICE_TYPES):
        return list(param)
    return [item.strip() for item in to_text(param).split(",")]


def _file_attr(file: Any, name: str, default: Any) -> Any:
    if isinstance(file, Mapping):
        return file.get(name, default)
    return getattr(file, name, default)


def compile_pattern(pattern: Any) -> re.Pattern:
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(to_text(pattern))
    except re.error as exc:
        raise ConfigurationError(f"Invalid pattern {pattern!r}: {exc}") from exc


# ──────────────────────────────────────────────────────────────────────────────
# Predykaty
# ──────────────────────────────────────────────────────────────────────────────

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
_SPECIAL_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})
_ALPHA_RE = re.compile(r"[a-zA-ZÀ-ɏ]+")
_ALPHANUMERIC_RE = re.compile(r"[a-zA-Z0-9À-ɏ]+")
_PHONE_RE = re.compile(r"\+?[\d\s\-().]{7,20}", re.ASCII)
_CARD_RE = re.compile(r"[0-9]{13,19}")
_STRONG_PASSWORD_RE = re.compile(r"(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])(?=.*[^A-Za-z0-9]).{8,}")
_HEX_COLOR_RE = re.compile(r"#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})")
_IPV4_RE = re.compile(r"(?:[0-9]{1,3}\.){3}[0-9]{1,3}")
_IPV6_RE = re.compile(r"(?:[0-9a-fA-F]{0,4}:){2,7}[0-9a-fA-F]{0,4}")


def _required(value: Any, param: Any, all_values: ValueMap) -> bool:
    return not is_empty(value)


def _min_length(value: Any, param: Any, all_values: ValueMap) -> bool:
    return len(to_text(value)) >= to_number(param)


def _max_length(value: Any, param: Any, all_values: ValueMap) -> bool:
    return len(to_text(value)) <= to_number(param)


def _min(value: Any, param: Any, all_values: ValueMap) -> bool:
    return to_number(value) >= to_number(param)


def _max(value: Any, param: Any, all_values: ValueMap) -> bool:
    return to_number(value) <= to_number(param)


def _email(value: Any, param: Any, all_values: ValueMap) -> bool:
    return _EMAIL_RE.fullmatch(to_text(value)) is not None


def _url(value: Any, param: Any, all_values: ValueMap) -> bool:
    text = to_text(value).strip()
    try:
        parts = urlsplit(text)
        hostname = parts.hostname
        parts.port  # ValueError dla niepoprawnego portu
    except ValueError:
        return False
    if not parts.scheme or not _SCHEME_RE.fullmatch(parts.scheme):
        return False
    if any(ch.isspace() for ch in parts.netloc):
        return False
    if parts.scheme.lower() in _SPECIAL_SCHEMES:
        return bool(hostname)
    return True


def _pattern(value: Any, param: Any, all_values: ValueMap) -> bool:
    return compile_pattern(param).search(to_text(value)) is not None


def _numeric(value: Any, param: Any, all_values: ValueMap) -> bool:
    return not math.isnan(to_number(value)) and to_text(value).strip() != ""


def _integer(value: Any, param: Any, all_values: ValueMap) -> bool:
    n = to_number(value)
    return math.isfinite(n) and n.is_integer()


def _alpha(value: Any, param: Any, all_values: ValueMap) -> bool:
    return _ALPHA_RE.fullmatch(to_text(value)) is not None


def _alphanumeric(value: Any, param: Any, all_values: ValueMap) -> bool:
    return _ALPHANUMERIC_RE.fullmatch(to_text(value)) is not None


def _phone(value: Any, param: Any, all_values: ValueMap) -> bool:
    return _PHONE_RE.fullmatch(to_text(value)) is not None


def _date(value: Any, param: Any, all_values: ValueMap) -> bool:
    return parse_date(value) is not None


def _date_min(value: Any, param: Any, all_values: ValueMap) -> bool:
    current, bound = parse_date(value), parse_date(param)
    return current is not None and bound is not None and current >= bound


def _date_max(value: Any, param: Any, all_values: ValueMap) -> bool:
    current, bound = parse_date(value), parse_date(param)
    return current is not None and bound is not None and current <= bound


def strict_equal(left: Any, right: Any) -> bool:
    """Równość bez mieszania bool z liczbami: True != 1, ale 1 == 1.0."""
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    return left == right


def _equal_to(value: Any, param: Any, all_values: ValueMap) -> bool:
    return strict_equal(value, all_values.get(param))


def _not_equal_to(value: Any, param: Any, all_values: ValueMap) -> bool:
    return not strict_equal(value, all_values.get(param))


def _in(value: Any, param: Any, all_values: ValueMap) -> bool:
    return to_text(value) in _choices(param)


def _not_in(value: Any, param: Any, all_values: ValueMap) -> bool:
    return to_text(value) not in _choices(param)


def _file_size(value: Any, param: Any, all_values: ValueMap) -> bool:
    if not isinstance(value, FileList) or not value:
        return True
    limit = to_number(param)
    return not any(to_number(_file_attr(f, "size", 0)) > limit for f in value)


def _file_type(value: Any, param: Any, all_values: ValueMap) -> bool:
    if not isinstance(value, FileList) or not value:
        return True
    allowed = [to_text(t).strip().lower().lstrip(".") for t in _choices(param)]
    allowed = [t for t in allowed if t]
    for f in value:
        ext = str(_file_attr(f, "name", "")).rsplit(".", 1)[-1].lower()
        content_type = str(_file_attr(f, "content_type", "") or "").lower()
        if not any(t == ext or content_type.startswith(t) for t in allowed):
            return False
    return True


def _credit_card(value: Any, param: Any, all_values: ValueMap) -> bool:
    digits = re.sub(r"\s", "", to_text(value))
    return _CARD_RE.fullmatch(digits) is not None and luhn_check(digits)


def _strong_password(value: Any, param: Any, all_values: ValueMap) -> bool:
    return _STRONG_PASSWORD_RE.fullmatch(to_text(value)) is not None


def _hex_color(value: Any, param: Any, all_values: ValueMap) -> bool:
    return _HEX_COLOR_RE.fullmatch(to_text(value)) is not None


def _ipv4(value: Any, param: Any, all_values: ValueMap) -> bool:
    text = to_text(value)
    if _IPV4_RE.fullmatch(text) is None:
        return False
    return all(int(octet) <= 255 for octet in text.split("."))


def _ipv6(value: Any, param: Any, all_values: ValueMap) -> bool:
    return _IPV6_RE.fullmatch(to_text(value)) is not None


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Not a JSON constant: {token}")


def _json(value: Any, param: Any, all_values: ValueMap) -> bool:
    try:
        json.loads(to_text(value), parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return False
    return True


BUILTIN_RULES: dict[str, Predicate] = {
    "required": _required,
    "minLength": _min_length,
    "maxLength": _max_length,
    "min": _min,
    "max": _max,
    "email": _email,
    "url": _url,
    "pattern": _pattern,
    "numeric": _numeric,
    "integer": _integer,
    "alpha": _alpha,
    "alphanumeric": _alphanumeric,
    "phone": _phone,
    "date": _date,
    "dateMin": _date_min,
    "dateMax": _date_max,
    "equalTo": _equal_to,
    "notEqualTo": _not_equal_to,
    "in": _in,
    "notIn": _not_in,
    "fileSize": _file_size,
    "fileType": _file_type,
    "creditCard": _credit_card,
    "strongPassword": _strong_password,
    "hexColor": _hex_color,
    "ipv4": _ipv4,
    "ipv6": _ipv6,
    "json": _json,
}


class BuiltinRuleLibrary:
    """Niemutowalna tablica wbudowanych reguł."""

    def __init__(self, rules: Mapping[str, Predicate] | None = None) -> None:
        self._rules = dict(BUILTIN_RULES if rules is None else rules)

    # -- RuleLibrary protocol ------------------------------------------

    def lookup(self, name: str) -> Optional[RuleEntry]:
        predicate = self._rules.get(name)
        if predicate is None:
            return None
        return RuleEntry(name=name, predicate=predicate, origin="builtin")

    def names(self) -> list[str]:
        return list(self._rules)
