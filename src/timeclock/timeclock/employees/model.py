from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: Plain data object; accounts and roles are managed outside this package.
    """

    employee_id: int
    name: str
    email: str
    role: Role = Role.EMPLOYEE
