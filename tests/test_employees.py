import pytest
from fastapi import status

from hr_admin.api import dependencies
from hr_admin.models.employee import EmployeeRole, EmploymentType
from tests.conftest import make_employee


def employee_payload(email, **overrides):
    payload = {
        "name": "Ana",
        "surname": "Silva",
        "email": email,
        "hire_date": "2023-03-01",
    }
    payload.update(overrides)
    return payload


class TestEmployees:
    """Test employee endpoints"""

    def test_create_employee(self, client):
        """Test creating an employee with valid identity numbers"""
        response = client.post("/employees", json=employee_payload(
            "ana@test.com",
            fiscal_number="529.982.247-25",
            fiscal_number_country="br",
            social_number="12345678901"
        ))
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["fiscal_number"] == "52998224725"
        assert data["fiscal_number_country"] == "BR"
        assert data["is_active"] is True
        assert data["manager_id"] is None

    def test_create_employee_invalid_fiscal_number(self, client):
        """Test a fiscal number with a wrong check digit"""
        response = client.post("/employees", json=employee_payload(
            "bad@test.com", fiscal_number="123456780", fiscal_number_country="PT"
        ))
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_create_employee_duplicate_email(self, client, employee):
        """Test registering an email twice"""
        response = client.post("/employees", json=employee_payload(employee.email))
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_employee_with_manager(self, client, manager):
        """Test creating an employee under an existing manager"""
        response = client.post("/employees", json=employee_payload("report@test.com", manager_id=manager.id))
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["manager_id"] == manager.id

    def test_create_employee_unknown_manager(self, client):
        """Test creating an employee under a manager that does not exist"""
        response = client.post("/employees", json=employee_payload("orphan@test.com", manager_id="missing"))
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_list_employees_excludes_inactive(self, client, db_session, employee):
        """Test that deactivated employees are hidden by default"""
        make_employee(db_session, "Gone", "gone@test.com", is_active=False)

        response = client.get("/employees")
        assert response.status_code == status.HTTP_200_OK
        assert [e["email"] for e in response.json()] == [employee.email]

        response = client.get("/employees?include_inactive=true")
        assert len(response.json()) == 2

    def test_get_unknown_employee(self, client):
        response = client.get("/employees/missing")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.parametrize("field", ["email", "name", "surname", "employment_type", "employee_role", "vacation_days_balance"])
    def test_update_required_field_to_null(self, client, employee, field):
        """Test that a required column cannot be cleared"""
        response = client.patch(f"/employees/{employee.id}", json={field: None})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_update_optional_field_to_null(self, client, db_session, employee):
        employee.social_number = "12345678901"
        db_session.commit()

        response = client.patch(f"/employees/{employee.id}", json={"social_number": None})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["social_number"] is None


class TestManagerAssignment:
    """Test hierarchy rules on the manager relation"""

    def test_assign_manager(self, client, employee, manager):
        response = client.put(f"/employees/{employee.id}/manager", json={"manager_id": manager.id})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["manager_id"] == manager.id

    def test_self_assignment_rejected(self, client, employee):
        response = client.put(f"/employees/{employee.id}/manager", json={"manager_id": employee.id})
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["code"] == "self_assignment"

    def test_cycle_rejected(self, client, db_session, manager):
        """A manages B; making B the manager of A closes a loop"""
        report = make_employee(db_session, "Report", "report@test.com", manager_id=manager.id)

        response = client.put(f"/employees/{manager.id}/manager", json={"manager_id": report.id})
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["code"] == "cycle"

    def test_cycle_rejected_through_update(self, client, db_session, manager):
        report = make_employee(db_session, "Report", "report@test.com", manager_id=manager.id)
        deep = make_employee(db_session, "Deep", "deep@test.com", manager_id=report.id)

        response = client.patch(f"/employees/{manager.id}", json={"manager_id": deep.id})
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_inactive_manager_rejected(self, client, db_session, employee):
        gone = make_employee(db_session, "Gone", "gone@test.com", is_active=False)
        response = client.put(f"/employees/{employee.id}/manager", json={"manager_id": gone.id})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_remove_manager(self, client, db_session, manager):
        report = make_employee(db_session, "Report", "report@test.com", manager_id=manager.id)

        response = client.delete(f"/employees/{report.id}/manager")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["manager_id"] is None

    def test_null_manager_assignment(self, client, db_session, manager):
        report = make_employee(db_session, "Report", "report@test.com", manager_id=manager.id)

        response = client.put(f"/employees/{report.id}/manager", json={"manager_id": None})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["manager_id"] is None

    def test_subordinates_and_chain(self, client, db_session, manager):
        report = make_employee(db_session, "Report", "report@test.com", manager_id=manager.id)
        deep = make_employee(db_session, "Deep", "deep@test.com", manager_id=report.id)

        response = client.get(f"/employees/{manager.id}/subordinates")
        assert [e["id"] for e in response.json()] == [report.id]

        response = client.get(f"/employees/{deep.id}/management-chain")
        assert [e["id"] for e in response.json()] == [report.id, manager.id]


class TestDeactivation:
    """Test deactivation guarded by active subordinates"""

    def test_manager_with_active_report_cannot_be_deactivated(self, client, db_session, manager):
        make_employee(db_session, "Report", "report@test.com", manager_id=manager.id)

        response = client.delete(f"/employees/{manager.id}")
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_manager_deactivated_after_report_leaves(self, client, db_session, manager):
        report = make_employee(db_session, "Report", "report@test.com", manager_id=manager.id)

        assert client.delete(f"/employees/{report.id}").status_code == status.HTTP_204_NO_CONTENT
        assert client.delete(f"/employees/{manager.id}").status_code == status.HTTP_204_NO_CONTENT

        data = client.get(f"/employees/{manager.id}").json()
        assert data["is_active"] is False
        assert data["termination_date"] is not None

    def test_deactivate_twice(self, client, employee):
        client.delete(f"/employees/{employee.id}")
        response = client.delete(f"/employees/{employee.id}")
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_restore(self, client, employee):
        client.delete(f"/employees/{employee.id}")
        response = client.post(f"/employees/{employee.id}/restore")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["is_active"] is True
        assert response.json()["termination_date"] is None


class TestEmployeeFilters:
    """Test list filters by role, employment type and name"""

    @pytest.fixture
    def staff(self, db_session):
        hr = make_employee(db_session, "Marta", "marta.hr@test.com")
        hr.employee_role = EmployeeRole.HR
        intern = make_employee(db_session, "Pedro", "pedro@test.com")
        intern.employment_type = EmploymentType.INTERNSHIP
        db_session.commit()
        return hr, intern

    def test_filter_by_role(self, client, staff):
        hr, _ = staff
        response = client.get("/employees?employee_role=HR")
        assert [e["id"] for e in response.json()] == [hr.id]

    def test_filter_by_employment_type(self, client, staff):
        _, intern = staff
        response = client.get("/employees?employment_type=INTERNSHIP")
        assert [e["id"] for e in response.json()] == [intern.id]

    def test_search_matches_name_and_email(self, client, staff):
        hr, intern = staff
        assert [e["id"] for e in client.get("/employees?search=pedr").json()] == [intern.id]
        assert [e["id"] for e in client.get("/employees?search=.hr@").json()] == [hr.id]

    def test_unknown_role(self, client):
        response = client.get("/employees?employee_role=CEO")
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestRowLocking:
    """Test that manager changes lock both rows in a fixed order"""

    def test_lock_order_is_sorted(self, monkeypatch, db_session):
        locked = []
        monkeypatch.setattr(dependencies, "lock_employee", lambda db, eid: locked.append(eid))

        dependencies.lock_employees(db_session, ["b-id", None, "a-id", "b-id"])
        assert locked == ["a-id", "b-id"]

    def test_crossing_assignment_rejected(self, client, employee, manager):
        first = client.put(f"/employees/{employee.id}/manager", json={"manager_id": manager.id})
        assert first.status_code == status.HTTP_200_OK

        second = client.put(f"/employees/{manager.id}/manager", json={"manager_id": employee.id})
        assert second.status_code == status.HTTP_409_CONFLICT
