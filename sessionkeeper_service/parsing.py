import re

_DURATION_UNITS_MS = {
    "ms": 1,
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
    "w": 7 * 24 * 60 * 60 * 1000,
}

_BYTE_UNITS = {
    "b": 1,
    "kb": 1024,
    "k": 1024,
    "mb": 1024 ** 2,
    "m": 1024 ** 2,
    "gb": 1024 ** 3,
    "g": 1024 ** 3,
}

_QUANTITY_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([a-z]*)\s*$")


def _parse_quantity(value, units: dict[str, int], kind: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid {kind}: {value!r}")
    if isinstance(value, (int, float)):
        result = int(value)
    elif isinstance(value, str):
        match = _QUANTITY_RE.match(value.lower())
        if not match:
            raise ValueError(f"Invalid {kind}: {value!r}")
        number, unit = match.groups()
        if unit and unit not in units:
            raise ValueError(f"Unknown {kind} unit {unit!r} in {value!r}")
        multiplier = units[unit or next(iter(units))]
        if "." in number:
            result = int(float(number) * multiplier)
        else:
            result = int(number) * multiplier
    else:
        raise ValueError(f"Invalid {kind}: {value!r}")

    if result <= 0:
        raise ValueError(f"{kind.capitalize()} must be positive, got {value!r}")
    return result


def parse_duration_ms(value) -> int:
    """Parse ``"30d"``, ``"12h"``, ``"500ms"`` or a plain number of milliseconds."""
    return _parse_quantity(value, _DURATION_UNITS_MS, "duration")


def parse_byte_size(value) -> int:
    """Parse ``"10mb"``, ``"512kb"`` or a plain number of bytes (binary multiples)."""
    return _parse_quantity(value, _BYTE_UNITS, "byte size")
