"""
User directory for the stub authentication service

Login only checks that a user exists; there is no credential verification.
The directory is injected (see core.deps.get_user_directory) so tests and
demos can swap the database-backed lookup for a fixed list.
"""
from typing import Iterable, Optional, Protocol
from pydantic import BaseModel
from sqlalchemy.orm import Session
from leave_app.models.employee import Employee


class DirectoryUser(BaseModel):
    employee_id: str
    name: str
    is_manager: bool = False
    manager_id: Optional[str] = None


class UserDirectory(Protocol):
    def lookup(self, employee_id: str) -> Optional[DirectoryUser]:
        """Return the user with this employee code, or None"""
        ...


class DatabaseUserDirectory:
    """Users are the rows of the employees table"""

    def __init__(self, db: Session):
        self.db = db

    def lookup(self, employee_id: str) -> Optional[DirectoryUser]:
        employee = self.db.query(Employee).filter(Employee.id == employee_id).first()
        if employee is None:
            return None
        return DirectoryUser(
            employee_id=employee.id,
            name=employee.name,
            is_manager=employee.is_manager,
            manager_id=employee.manager_id,
        )


class StaticUserDirectory:
    """Fixed in-memory user list"""

    def __init__(self, users: Iterable[DirectoryUser]):
        self._users = {user.employee_id: user for user in users}

    def lookup(self, employee_id: str) -> Optional[DirectoryUser]:
        return self._users.get(employee_id)


DEMO_USERS = [
    DirectoryUser(employee_id="K012345", name="Mohammad Farhadi", manager_id="K000001"),
    DirectoryUser(employee_id="K012346", name="Bertold Oravecz", manager_id="K000001"),
    DirectoryUser(employee_id="K012347", name="Carol Davis", manager_id="K000002"),
    DirectoryUser(employee_id="K000001", name="Velthoven Jeroen-van", is_manager=True),
    DirectoryUser(employee_id="K000002", name="Eszter Nasz", is_manager=True),
]
