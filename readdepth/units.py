"""深度单位换算 — 样本单位为米, 显示时纯乘法换算。"""

_FACTORS = {"mm": 1000.0, "cm": 100.0, "m": 1.0}


def convert_depth(meters: float, unit: str) -> float:
    """未知单位按米处理。"""
    return meters * _FACTORS.get(unit, 1.0)


def symbol_for_unit(unit: str) -> str:
    return unit if unit in _FACTORS else "m"


def format_depth(meters: float, unit: str) -> str:
    return f"Depth: {convert_depth(meters, unit):.2f} {symbol_for_unit(unit)}"
