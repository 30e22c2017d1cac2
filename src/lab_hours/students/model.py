from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Student:
    """Domain entity: a student who signs in to the lab.

    `id` is the external id assigned by the members service. `project_hours`
    is derived from closed lab sessions and only filled by queries that
    aggregate them.
    """

    id: int
    first_name: str
    last_name: str
    project_hours: float = 0.0

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
