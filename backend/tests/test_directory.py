"""Tests for the role & account directory.

Covers:
- Signup creates an unapproved account holding its requested role
- Sign-in refused for pending accounts before the password is checked
- Role lookups fail closed
- Role reassignment is admin-only and keeps exactly one role row
- Principal resolution on every request
"""
import pytest

from campus_events.errors import AccountPendingApproval, Forbidden
from campus_events.models.account import Role, RoleAssignment
from campus_events.services import directory_service
from tests.conftest import create_test_account


def _signup(client, email="new.student@x.edu", password="signup-pass-1", role="student"):
    return client.post("/api/auth/signup", json={
        "full_name": "New Student",
        "email": email,
        "password": password,
        "role": role,
        "department": "Computing",
    })


class TestSignup:

    def test_signup_creates_pending_account(self, client):
        resp = _signup(client)
        assert resp.status_code == 201, resp.text
        data = resp.json()
        assert data["is_approved"] is False
        assert data["role"] == "student"
        assert data["department"] == "Computing"

    def test_signup_normalizes_email(self, client):
        resp = _signup(client, email="Mixed.Case@X.edu")
        assert resp.status_code == 201
        assert resp.json()["email"] == "mixed.case@x.edu"

    def test_duplicate_email_conflicts(self, client):
        assert _signup(client).status_code == 201
        resp = _signup(client, email="NEW.student@x.edu")
        assert resp.status_code == 409
        assert resp.json()["detail"]["code"] == "conflict"

    def test_staff_signup_allowed(self, client):
        resp = _signup(client, role="staff")
        assert resp.status_code == 201
        assert resp.json()["role"] == "staff"

    def test_admin_signup_refused(self, client, db):
        resp = _signup(client, role="admin")
        assert resp.status_code == 422
        assert directory_service.find_by_email(db, "new.student@x.edu") is None


class TestAuthenticate:

    def test_pending_account_refused_with_correct_password(self, client):
        _signup(client, email="pending@x.edu", password="right-pass-1")
        resp = client.post("/api/auth/login", json={"email": "pending@x.edu", "password": "right-pass-1"})
        assert resp.status_code == 403
        assert resp.json()["detail"]["code"] == "account_pending_approval"

    def test_pending_account_refused_the_same_way_with_wrong_password(self, client):
        _signup(client, email="pending@x.edu", password="right-pass-1")
        resp = client.post("/api/auth/login", json={"email": "pending@x.edu", "password": "wrong-pass-1"})
        assert resp.status_code == 403
        assert resp.json()["detail"]["code"] == "account_pending_approval"

    def test_approved_account_signs_in(self, client, db):
        account = create_test_account(db, name="Staff Member", role="staff")
        resp = client.post("/api/auth/login", json={
            "email": account["email"], "password": account["password"],
        })
        assert resp.status_code == 200, resp.text
        assert resp.json()["role"] == "staff"

    def test_wrong_password(self, client, db):
        account = create_test_account(db, name="Staff Member", role="staff")
        resp = client.post("/api/auth/login", json={"email": account["email"], "password": "nope-nope-1"})
        assert resp.status_code == 401
        assert resp.json()["detail"]["code"] == "invalid_credentials"

    def test_unknown_email(self, client):
        resp = client.post("/api/auth/login", json={"email": "ghost@x.edu", "password": "whatever-1"})
        assert resp.status_code == 401


class TestResolveRole:

    def test_resolve_role(self, db):
        account = create_test_account(db, name="Admin", role="admin")
        assert directory_service.resolve_role(db, account["account_id"]) == Role.admin

    def test_missing_role_fails_closed(self, db):
        account = create_test_account(db, name="Roleless", role="staff")
        db.query(RoleAssignment).filter(RoleAssignment.account_id == account["account_id"]).delete()
        db.commit()

        assert directory_service.resolve_role(db, account["account_id"]) is None
        with pytest.raises(Forbidden):
            directory_service.require_role(db, account["account_id"])

    def test_pending_account_cannot_use_its_role(self, db):
        pending = create_test_account(db, name="Pending Admin", role="admin", approved=False)
        assert directory_service.resolve_role(db, pending["account_id"]) == Role.admin
        with pytest.raises(AccountPendingApproval):
            directory_service.require_role(db, pending["account_id"], Role.admin)

    def test_is_approved(self, db):
        approved = create_test_account(db, name="Approved")
        pending = create_test_account(db, name="Pending", approved=False)
        assert directory_service.is_approved(db, approved["account_id"]) is True
        assert directory_service.is_approved(db, pending["account_id"]) is False
        assert directory_service.is_approved(db, "no-such-account") is False


class TestReassignRole:

    def test_admin_reassigns_role(self, client, db):
        admin = create_test_account(db, name="Admin", role="admin")
        student = create_test_account(db, name="Student")

        resp = client.put(
            f"/api/accounts/{student['account_id']}/role",
            json={"role": "staff"},
            headers=admin["headers"],
        )
        assert resp.status_code == 200, resp.text
        assert resp.json()["role"] == "staff"

        db.expire_all()
        rows = db.query(RoleAssignment).filter(RoleAssignment.account_id == student["account_id"]).all()
        assert [r.role for r in rows] == [Role.staff]

    def test_same_role_leaves_one_row(self, client, db):
        admin = create_test_account(db, name="Admin", role="admin")
        staff = create_test_account(db, name="Staff", role="staff")

        for _ in range(2):
            resp = client.put(
                f"/api/accounts/{staff['account_id']}/role",
                json={"role": "staff"},
                headers=admin["headers"],
            )
            assert resp.status_code == 200

        db.expire_all()
        assert db.query(RoleAssignment).filter(
            RoleAssignment.account_id == staff["account_id"]
        ).count() == 1

    def test_reassign_inserts_when_role_missing(self, db):
        admin = create_test_account(db, name="Admin", role="admin")
        target = create_test_account(db, name="Roleless", role="student")
        db.query(RoleAssignment).filter(RoleAssignment.account_id == target["account_id"]).delete()
        db.commit()

        directory_service.reassign_role(db, admin["account_id"], target["account_id"], Role.staff)
        assert directory_service.resolve_role(db, target["account_id"]) == Role.staff

    def test_non_admin_forbidden(self, client, db):
        staff = create_test_account(db, name="Staff", role="staff")
        student = create_test_account(db, name="Student")

        resp = client.put(
            f"/api/accounts/{student['account_id']}/role",
            json={"role": "admin"},
            headers=staff["headers"],
        )
        assert resp.status_code == 403
        db.expire_all()
        assert directory_service.resolve_role(db, student["account_id"]) == Role.student

    def test_unknown_target(self, client, db):
        admin = create_test_account(db, name="Admin", role="admin")
        resp = client.put("/api/accounts/missing/role", json={"role": "staff"}, headers=admin["headers"])
        assert resp.status_code == 404


class TestPrincipal:

    def test_missing_header(self, client):
        assert client.get("/api/auth/me").status_code == 401

    def test_unknown_account(self, client):
        assert client.get("/api/auth/me", headers={"X-Account-Id": "nobody"}).status_code == 401

    def test_pending_account_cannot_act(self, client, db):
        pending = create_test_account(db, name="Pending", approved=False)
        resp = client.get("/api/auth/me", headers=pending["headers"])
        assert resp.status_code == 403
        assert resp.json()["detail"]["code"] == "account_pending_approval"

    def test_me(self, client, db):
        student = create_test_account(db, name="Student")
        resp = client.get("/api/auth/me", headers=student["headers"])
        assert resp.status_code == 200
        assert resp.json()["account_id"] == student["account_id"]

    def test_list_accounts_admin_only(self, client, db):
        admin = create_test_account(db, name="Admin", role="admin")
        student = create_test_account(db, name="Student")

        assert client.get("/api/accounts/", headers=student["headers"]).status_code == 403
        resp = client.get("/api/accounts/", headers=admin["headers"])
        assert resp.status_code == 200
        assert [a["full_name"] for a in resp.json()] == ["Admin", "Student"]
