"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/reporting.py
============================================================
Class: PostgresReportingRepository

Responsibilities:
- Agregaciones de solo lectura para /reports y /dashboard.
- Construir filtros opcionales (fechas, departamento, estado) de forma
  parametrizada.

Collaborators:
- postgres._base.PostgresRepository

Notes:
- Los filtros de fecha de attendance/performance van en la condición del
  LEFT JOIN para que los empleados sin registros sigan apareciendo.
- Los montos (salary) vuelven como Decimal; la capa HTTP serializa.
============================================================
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from ._base import PostgresRepository


class _Filters:
    """Acumula fragmentos SQL fijos + parámetros en orden."""

    def __init__(self) -> None:
        self.clauses: list[str] = []
        self.params: list[object] = []

    def add(self, clause: str, value: object) -> None:
        if value is None:
            return
        self.clauses.append(clause)
        self.params.append(value)

    def sql(self, prefix: str = "AND") -> str:
        return "".join(f" {prefix} {c}" for c in self.clauses)


class PostgresReportingRepository(PostgresRepository):
    # =========================================================
    # Reports
    # =========================================================
    def attendance_report(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        department_id: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        join_filters = _Filters()
        join_filters.add("a.check_time::date >= %s", start_date)
        join_filters.add("a.check_time::date <= %s", end_date)
        where_filters = _Filters()
        where_filters.add("u.department_id = %s", department_id)

        return self._fetch_dicts(
            query=f"""
                SELECT
                    u.id, u.first_name, u.last_name, u.email,
                    d.name AS department_name,
                    COUNT(*) FILTER (WHERE a.status = 'Checked In') AS check_ins,
                    COUNT(*) FILTER (WHERE a.status = 'Checked Out') AS check_outs,
                    MIN(a.check_time) FILTER (WHERE a.status = 'Checked In') AS first_check_in,
                    MAX(a.check_time) FILTER (WHERE a.status = 'Checked Out') AS last_check_out
                FROM users u
                LEFT JOIN departments d ON u.department_id = d.id
                LEFT JOIN attendance a ON u.id = a.user_id{join_filters.sql()}
                WHERE u.role = 'employee'{where_filters.sql()}
                GROUP BY u.id, u.first_name, u.last_name, u.email, d.name
                ORDER BY u.first_name
            """,
            params=[*join_filters.params, *where_filters.params],
            context_msg="PostgresReportingRepository: attendance_report failed",
        )

    def leave_report(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[str] = None,
        department_id: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        filters = _Filters()
        filters.add("l.start_date >= %s", start_date)
        filters.add("l.end_date <= %s", end_date)
        filters.add("l.status = %s", status)
        filters.add("u.department_id = %s", department_id)

        return self._fetch_dicts(
            query=f"""
                SELECT
                    l.id, l.leave_type, l.start_date, l.end_date, l.reason, l.status,
                    u.first_name, u.last_name, u.email, d.name AS department_name,
                    CASE
                        WHEN l.approved_by IS NOT NULL
                            THEN CONCAT(approver.first_name, ' ', approver.last_name)
                        ELSE 'Pending'
                    END AS approved_by_name,
                    l.created_at
                FROM leaves l
                JOIN users u ON l.user_id = u.id
                LEFT JOIN departments d ON u.department_id = d.id
                LEFT JOIN users approver ON l.approved_by = approver.id
                WHERE 1=1{filters.sql()}
                ORDER BY l.created_at DESC
            """,
            params=filters.params,
            context_msg="PostgresReportingRepository: leave_report failed",
        )

    def payroll_report(
        self, *, department_id: Optional[int] = None
    ) -> list[dict[str, Any]]:
        filters = _Filters()
        filters.add("u.department_id = %s", department_id)

        return self._fetch_dicts(
            query=f"""
                SELECT
                    u.id, u.first_name, u.last_name, u.email, u.position, u.salary,
                    d.name AS department_name, u.hire_date,
                    EXTRACT(YEAR FROM AGE(CURRENT_DATE, u.hire_date))::int AS years_of_service
                FROM users u
                LEFT JOIN departments d ON u.department_id = d.id
                WHERE u.role = 'employee'{filters.sql()}
                ORDER BY u.salary DESC
            """,
            params=filters.params,
            context_msg="PostgresReportingRepository: payroll_report failed",
        )

    def performance_report(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        department_id: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        join_filters = _Filters()
        join_filters.add("pr.review_date::date >= %s", start_date)
        join_filters.add("pr.review_date::date <= %s", end_date)
        where_filters = _Filters()
        where_filters.add("u.department_id = %s", department_id)

        return self._fetch_dicts(
            query=f"""
                SELECT
                    u.id, u.first_name, u.last_name, u.email, d.name AS department_name,
                    COUNT(pr.id) AS total_reviews,
                    AVG(pr.rating) AS average_rating,
                    MIN(pr.rating) AS min_rating,
                    MAX(pr.rating) AS max_rating,
                    MAX(pr.review_date) AS last_review_date
                FROM users u
                LEFT JOIN departments d ON u.department_id = d.id
                LEFT JOIN performance_reviews pr ON u.id = pr.employee_id{join_filters.sql()}
                WHERE u.role = 'employee'{where_filters.sql()}
                GROUP BY u.id, u.first_name, u.last_name, u.email, d.name
                ORDER BY average_rating DESC NULLS LAST
            """,
            params=[*join_filters.params, *where_filters.params],
            context_msg="PostgresReportingRepository: performance_report failed",
        )

    def department_report(self) -> list[dict[str, Any]]:
        return self._fetch_dicts(
            query="""
                SELECT
                    d.id, d.name, d.description,
                    COUNT(u.id) AS employee_count,
                    AVG(u.salary) AS average_salary,
                    SUM(u.salary) AS total_salary,
                    COUNT(*) FILTER (WHERE u.is_active) AS active_employees
                FROM departments d
                LEFT JOIN users u ON d.id = u.department_id AND u.role = 'employee'
                GROUP BY d.id, d.name, d.description
                ORDER BY employee_count DESC
            """,
            context_msg="PostgresReportingRepository: department_report failed",
        )

    def analytics(self) -> dict[str, Any]:
        counts = self._fetch_dicts(
            query="""
                SELECT
                    (SELECT COUNT(DISTINCT user_id) FROM attendance
                      WHERE check_time::date = CURRENT_DATE AND status = 'Checked In')
                        AS present_today,
                    (SELECT COUNT(DISTINCT user_id) FROM leaves
                      WHERE status = 'approved' AND CURRENT_DATE BETWEEN start_date AND end_date)
                        AS on_leave_today,
                    (SELECT COUNT(*) FROM users WHERE role = 'employee' AND is_active)
                        AS total_employees
            """,
            context_msg="PostgresReportingRepository: analytics failed",
        )
        recent = self._fetch_dicts(
            query="""
                (SELECT 'attendance' AS type, u.first_name, u.last_name,
                        a.check_time AS timestamp, a.status AS action
                   FROM attendance a JOIN users u ON a.user_id = u.id
                  ORDER BY a.check_time DESC LIMIT 5)
                UNION ALL
                (SELECT 'leave' AS type, u.first_name, u.last_name,
                        l.created_at AS timestamp, l.status AS action
                   FROM leaves l JOIN users u ON l.user_id = u.id
                  ORDER BY l.created_at DESC LIMIT 5)
                ORDER BY timestamp DESC
                LIMIT 10
            """,
            context_msg="PostgresReportingRepository: analytics recent failed",
        )
        row = counts[0] if counts else {}
        return {
            "presentToday": row.get("present_today", 0),
            "onLeaveToday": row.get("on_leave_today", 0),
            "totalEmployees": row.get("total_employees", 0),
            "recentActivities": recent,
        }

    # =========================================================
    # Dashboard
    # =========================================================
    def dashboard_stats(self, *, include_admin_figures: bool) -> dict[str, Any]:
        rows = self._fetch_dicts(
            query="""
                SELECT
                    (SELECT COUNT(*) FROM users WHERE role != 'admin') AS total_employees,
                    (SELECT COUNT(*) FROM users
                      WHERE role != 'admin'
                        AND created_at >= DATE_TRUNC('month', CURRENT_DATE)) AS new_this_month,
                    (SELECT COUNT(DISTINCT user_id) FROM attendance
                      WHERE check_time::date = CURRENT_DATE AND status = 'Checked In') AS present,
                    (SELECT COUNT(DISTINCT user_id) FROM leaves
                      WHERE status = 'approved'
                        AND CURRENT_DATE BETWEEN start_date AND end_date) AS on_leave,
                    (SELECT COALESCE(SUM(salary), 0) FROM users
                      WHERE role != 'admin' AND is_active) AS total_salary,
                    (SELECT COUNT(*) FROM leaves WHERE status = 'pending') AS pending
            """,
            context_msg="PostgresReportingRepository: dashboard_stats failed",
        )
        row = rows[0] if rows else {}
        return {
            "totalEmployees": row.get("total_employees", 0),
            "presentToday": row.get("present", 0),
            "onLeave": row.get("on_leave", 0),
            "totalSalary": float(row.get("total_salary") or 0)
            if include_admin_figures
            else 0,
            "pendingLeaves": row.get("pending", 0) if include_admin_figures else 0,
            "newEmployeesThisMonth": row.get("new_this_month", 0),
        }

    def recent_activity(self) -> list[dict[str, Any]]:
        return self._fetch_dicts(
            query="""
                (SELECT 'attendance' AS type, a.check_time AS occurred_at,
                        a.status, NULL::varchar AS leave_type,
                        u.first_name, u.last_name
                   FROM attendance a JOIN users u ON a.user_id = u.id
                  WHERE a.check_time >= CURRENT_DATE - INTERVAL '7 days'
                  ORDER BY a.check_time DESC LIMIT 10)
                UNION ALL
                (SELECT 'leave' AS type, l.created_at AS occurred_at,
                        l.status, l.leave_type,
                        u.first_name, u.last_name
                   FROM leaves l JOIN users u ON l.user_id = u.id
                  WHERE l.created_at >= CURRENT_DATE - INTERVAL '7 days'
                  ORDER BY l.created_at DESC LIMIT 10)
                ORDER BY occurred_at DESC
            """,
            context_msg="PostgresReportingRepository: recent_activity failed",
        )

    def user_dashboard(self, user_id: int) -> dict[str, Any]:
        rows = self._fetch_dicts(
            query="""
                SELECT
                    u.salary, u.hire_date, u.position, d.name AS department_name,
                    (SELECT COUNT(*) FROM leaves WHERE user_id = u.id) AS total_leaves,
                    (SELECT COUNT(*) FROM leaves
                      WHERE user_id = u.id AND status = 'approved') AS approved_leaves,
                    (SELECT COUNT(*) FROM leaves
                      WHERE user_id = u.id AND status = 'pending') AS pending_leaves
                FROM users u
                LEFT JOIN departments d ON u.department_id = d.id
                WHERE u.id = %s
            """,
            params=(user_id,),
            context_msg="PostgresReportingRepository: user_dashboard failed",
            extra={"user_id": user_id},
        )
        return rows[0] if rows else {}
