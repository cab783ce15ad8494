"""Canonical CMM report payloads, one per defect signature.

These are representative exports used for demos and as golden inputs in
tests; they are not consulted by the deduction logic.
"""

from __future__ import annotations

_HEADER = (
    "Report Name CMM REPORT\n"
    "Part No. A3188-337-00\n"
    "Feature Nom Act Dev LoTol UpTol OutTol\n"
)

SCENARIOS: dict[str, str] = {
    "good": _HEADER
    + (
        "POINT1_X 12.500 12.499 -0.001 -0.1 0.1 0\n"
        "POINT1_Y 24.300 24.302 0.002 -0.1 0.1 0\n"
        "CIRCLE9_THICK_X 42.000 42.010 0.010 -0.2 0.2 0\n"
        "POINT62_THIN_X 5.100 5.102 0.002 -0.1 0.1 0"
    ),
    "offset": _HEADER
    + (
        "POINT1_X 12.500 12.614 0.114 -0.1 0.1 1\n"
        "POINT1_Y 24.300 24.421 0.121 -0.1 0.1 1\n"
        "POINT62_THIN_X 5.100 5.212 0.112 -0.1 0.1 1\n"
        "POINT68_THIN_Z 2.800 2.913 0.113 -0.1 0.1 1\n"
        "CIRCLE16_THICK_X 13.000 13.120 0.120 -0.2 0.2 0"
    ),
    "shrinkage": _HEADER
    + (
        "CIRCLE9_THICK_X 42.000 41.485 -0.515 -0.2 0.2 1\n"
        "CIRCLE9_THICK_Y 17.000 16.583 -0.417 -0.1 0.1 1\n"
        "CYLINDER12_THICK_Z 14.500 14.071 -0.429 -0.2 0.2 1\n"
        "CIRCLE21_THICK_Y 37.000 36.592 -0.408 -0.1 0.1 1\n"
        "POINT62_THIN_X 5.100 5.094 -0.006 -0.1 0.1 0"
    ),
    "gas": _HEADER
    + (
        "POINT62_THIN_X 5.100 5.341 0.241 -0.1 0.1 1\n"
        "POINT67_THIN_Y 3.500 3.283 -0.217 -0.1 0.1 1\n"
        "POINT68_THIN_Z 2.800 3.014 0.214 -0.1 0.1 1\n"
        "LINE72_THIN_XZ 25.000 24.777 -0.223 -0.1 0.1 1\n"
        "CIRCLE16_THICK_X 13.000 13.029 0.029 -0.2 0.2 0"
    ),
    "coldshut": _HEADER
    + (
        "LINE3_X 60.000 59.872 -0.128 -0.2 0.2 0\n"
        "ANGLE6_YZ 90.00 89.32 -0.68 -1.0 1.0 0\n"
        "ANGLE4_XY 45.00 44.37 -0.63 -1.0 1.0 0\n"
        "CIRCLE21_THICK_Y 37.000 36.995 -0.005 -0.1 0.1 0"
    ),
}


def get_scenario(name: str) -> str:
    """Return the report text for a named scenario.

    Raises:
        KeyError: If ``name`` is not a known scenario.

    """
    try:
        return SCENARIOS[name]
    except KeyError:
        available = ", ".join(sorted(SCENARIOS))
        raise KeyError(f"Unknown scenario '{name}'. Available: {available}") from None
