#!/usr/bin/env python3
"""
Endpoint tests for admin account management and platform statistics.
"""

import unittest

from tests import ApiTestCase


class AdminTestCase(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.admin_id, self.admin = self.register("admin@example.com", role="admin", name="Admin")
        self.recruiter_id, self.recruiter = self.register("hr@example.com", role="recruiter", name="HR")
        self.jane_id, self.jane = self.register("jane@example.com", name="Jane")

    def login(self, email, password="secret123"):
        return self.client.post("/api/auth/login", json={"email": email, "password": password})


class TestListUsers(AdminTestCase):

    def test_admin_only(self):
        for token in (self.recruiter, self.jane):
            response = self.client.get("/api/admin/users", headers=self.auth(token))
            self.assertEqual(response.status_code, 403)

    def test_newest_first(self):
        body = self.client.get("/api/admin/users", headers=self.auth(self.admin)).json()

        self.assertEqual(body["total"], 3)
        self.assertEqual([item["id"] for item in body["items"]], [self.jane_id, self.recruiter_id, self.admin_id])
        self.assertEqual(body["items"][0]["email"], "jane@example.com")
        self.assertEqual(body["items"][0]["role"], "user")
        self.assertNotIn("password_hash", body["items"][0])

    def test_paging(self):
        body = self.client.get(
            "/api/admin/users",
            params={"limit": 2, "offset": 0},
            headers=self.auth(self.admin)
        ).json()

        self.assertEqual(len(body["items"]), 2)
        self.assertEqual(body["next_offset"], 2)


class TestCreateUser(AdminTestCase):

    def create(self, **fields):
        payload = {"name": "Sam", "email": "sam@example.com", "password": "hunter22", "role": "recruiter"}
        payload.update(fields)
        return self.client.post("/api/admin/users", json=payload, headers=self.auth(self.admin))

    def test_create_user(self):
        response = self.create()

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["email"], "sam@example.com")
        self.assertEqual(body["role"], "recruiter")
        self.assertEqual(body["message"], "User created successfully")

        login = self.login("sam@example.com", "hunter22")
        self.assertEqual(login.status_code, 200)
        self.assertEqual(login.json()["user"]["role"], "recruiter")

    def test_duplicate_email(self):
        response = self.create(email="jane@example.com")

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"]["code"], "EMAIL_EXISTS")

    def test_invalid_role(self):
        response = self.create(role="owner")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["code"], "INVALID_ROLE")

    def test_missing_password(self):
        response = self.create(password=None)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["field"], "password")

    def test_non_admin(self):
        response = self.client.post(
            "/api/admin/users",
            json={"name": "Sam", "email": "sam@example.com", "password": "hunter22"},
            headers=self.auth(self.recruiter)
        )
        self.assertEqual(response.status_code, 403)


class TestUpdateUser(AdminTestCase):

    def patch(self, user_id, payload):
        return self.client.patch(f"/api/admin/users/{user_id}", json=payload, headers=self.auth(self.admin))

    def test_update_role_and_name(self):
        response = self.patch(self.jane_id, {"role": "recruiter", "name": "Jane R"})

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["id"], self.jane_id)
        self.assertEqual(sorted(body["updated_fields"]), ["name", "role"])

        user = self.login("jane@example.com").json()["user"]
        self.assertEqual(user["role"], "recruiter")
        self.assertEqual(user["name"], "Jane R")

    def test_update_password(self):
        response = self.patch(self.jane_id, {"password": "changed99"})

        self.assertEqual(response.json()["updated_fields"], ["password"])
        self.assertEqual(self.login("jane@example.com").status_code, 401)
        self.assertEqual(self.login("jane@example.com", "changed99").status_code, 200)

    def test_email_taken_by_another_account(self):
        response = self.patch(self.jane_id, {"email": "hr@example.com"})

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"]["code"], "EMAIL_EXISTS")

    def test_keeping_own_email(self):
        response = self.patch(self.jane_id, {"email": "jane@example.com"})
        self.assertEqual(response.status_code, 200)

    def test_no_updates(self):
        response = self.patch(self.jane_id, {})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["code"], "NO_UPDATES")

    def test_invalid_role(self):
        response = self.patch(self.jane_id, {"role": "owner"})
        self.assertEqual(response.json()["error"]["code"], "INVALID_ROLE")

    def test_unknown_user(self):
        self.assertEqual(self.patch(9999, {"name": "Ghost"}).status_code, 404)


class TestDeleteUser(AdminTestCase):

    def delete(self, user_id):
        return self.client.delete(f"/api/admin/users/{user_id}", headers=self.auth(self.admin))

    def test_cannot_delete_self(self):
        response = self.delete(self.admin_id)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["code"], "CANNOT_DELETE_SELF")

    def test_unknown_user(self):
        self.assertEqual(self.delete(9999).status_code, 404)

    def test_delete_removes_owned_data(self):
        job = self.create_job(self.recruiter)
        resume = self.upload_text(self.jane, "Python developer with Django.")
        self.client.post(
            "/api/applications",
            json={"job_id": job, "resume_id": resume},
            headers=self.auth(self.jane)
        )

        response = self.delete(self.recruiter_id)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"message": "User deleted successfully", "id": self.recruiter_id})

        stats = self.client.get("/api/admin/stats", headers=self.auth(self.admin)).json()
        self.assertEqual(stats["total_users"], 2)
        self.assertEqual(stats["total_jobs"], 0)
        self.assertEqual(stats["total_applications"], 0)
        self.assertEqual(stats["total_resumes"], 1)


class TestStats(AdminTestCase):

    def test_admin_only(self):
        response = self.client.get("/api/admin/stats", headers=self.auth(self.recruiter))
        self.assertEqual(response.status_code, 403)

    def test_stats(self):
        job = self.create_job(self.recruiter)
        other_job = self.create_job(self.recruiter, title="Data Engineer")
        resume = self.upload_text(self.jane, "Python developer with Django.")
        first = self.client.post(
            "/api/applications",
            json={"job_id": job, "resume_id": resume},
            headers=self.auth(self.jane)
        ).json()["id"]
        self.client.post(
            "/api/applications",
            json={"job_id": other_job, "resume_id": resume},
            headers=self.auth(self.jane)
        )
        self.client.patch(
            f"/api/applications/{first}/status",
            json={"status": "accepted"},
            headers=self.auth(self.recruiter)
        )

        response = self.client.get("/api/admin/stats", headers=self.auth(self.admin))

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["total_users"], 3)
        self.assertEqual(body["total_resumes"], 1)
        self.assertEqual(body["total_jobs"], 2)
        self.assertEqual(body["total_applications"], 2)
        self.assertEqual(body["applications_by_status"], {"accepted": 1, "pending": 1})
        self.assertIsNotNone(body["generated_at"])


if __name__ == '__main__':
    unittest.main()
