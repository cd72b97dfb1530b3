"""HRMS backend: auth, attendance, employees, leaves, performance and reports."""

__version__ = "1.0.0"
