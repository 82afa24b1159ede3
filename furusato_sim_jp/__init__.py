"""Furusato Nozei Deduction Limit Simulation Package."""

from furusato_sim_jp.params import (
    SimulatorInput,
    DetailedSimulatorInput,
    SimulatorResult,
    PREFECTURES,
    DISABILITY_NONE,
    DISABILITY_ORDINARY,
    DISABILITY_SPECIAL,
    DISABILITY_SPECIAL_LIVING_TOGETHER,
    man_to_yen,
    validate_simulator_input,
    validate_detailed_input,
)
from furusato_sim_jp.simulation import (
    estimate_limit_yen,
    estimate_detailed_limit_yen,
    calc_simple_breakdown,
    calc_detailed_breakdown,
    calc_safe_limit,
    simulate_limit,
    simulate_detailed_limit,
    build_history_record,
)
from furusato_sim_jp.limit_table import (
    FamilyPattern,
    LimitTableRow,
    FAMILY_PATTERNS,
    generate_limit_table,
    format_limit,
    render_limit_table_markdown,
)

__all__ = [
    "SimulatorInput",
    "DetailedSimulatorInput",
    "SimulatorResult",
    "PREFECTURES",
    "DISABILITY_NONE",
    "DISABILITY_ORDINARY",
    "DISABILITY_SPECIAL",
    "DISABILITY_SPECIAL_LIVING_TOGETHER",
    "man_to_yen",
    "validate_simulator_input",
    "validate_detailed_input",
    "estimate_limit_yen",
    "estimate_detailed_limit_yen",
    "calc_simple_breakdown",
    "calc_detailed_breakdown",
    "calc_safe_limit",
    "simulate_limit",
    "simulate_detailed_limit",
    "build_history_record",
    "FamilyPattern",
    "LimitTableRow",
    "FAMILY_PATTERNS",
    "generate_limit_table",
    "format_limit",
    "render_limit_table_markdown",
]
