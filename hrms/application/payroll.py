"""
===============================================================================
TARJETA CRC — application/payroll.py
===============================================================================

Responsabilidades:
    - Resumen del reporte de nómina (total, promedio, mínimo, máximo).

Colaboradores:
    - ReportingRepository.payroll_report (filas con "salary")
    - api/routers/reports.py
===============================================================================
"""

from __future__ import annotations

from typing import Any, Iterable


def _amount(value: Any) -> float:
    return float(value or 0)


def payroll_summary(rows: Iterable[dict[str, Any]]) -> dict[str, Any]:
    """Sin filas, todos los montos valen 0."""
    salaries = [_amount(row.get("salary")) for row in rows]
    total = sum(salaries)
    return {
        "totalEmployees": len(salaries),
        "totalSalary": total,
        "averageSalary": total / len(salaries) if salaries else 0,
        "minSalary": min(salaries) if salaries else 0,
        "maxSalary": max(salaries) if salaries else 0,
    }
