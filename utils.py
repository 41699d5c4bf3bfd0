from datetime import datetime, timezone

# Capacitive sensor references on a 10-bit ADC: reading in open air vs. in water.
DRY_REFERENCE = 520
WET_REFERENCE = 260


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_now() -> str:
    # 2026-10-17T14:03:07.412Z
    return utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")


def raw_to_percent(raw: float, dry: float = DRY_REFERENCE, wet: float = WET_REFERENCE) -> float:
    """
    Linear map of a raw ADC value onto 0-100 % moisture.

    ``dry`` maps to 0 and ``wet`` to 100; either may be the larger number.
    Values beyond the references are clamped.
    """
    if dry == wet:
        raise ValueError("dry and wet references must differ")
    pct = (raw - dry) * 100.0 / (wet - dry)
    return round(min(100.0, max(0.0, pct)), 1)


def format_days(days: float) -> str:
    # 30.0 -> "30", 1.5 -> "1.5"
    return f"{days:.15g}"
