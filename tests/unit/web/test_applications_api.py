#!/usr/bin/env python3
"""
Endpoint tests for job applications and their review workflow.
"""

import unittest

from tests import ApiTestCase

JANE_RESUME = "Jane Doe. Python developer reachable at jane@example.com"


class ApplicationTestCase(ApiTestCase):

    def setUp(self):
        super().setUp()
        _, self.recruiter = self.register("hr@example.com", role="recruiter", name="HR")
        _, self.other_recruiter = self.register("hr2@example.com", role="recruiter", name="Other HR")
        _, self.admin = self.register("admin@example.com", role="admin", name="Admin")
        self.jane_id, self.jane = self.register("jane@example.com", name="Jane")
        self.bob_id, self.bob = self.register("bob@example.com", name="Bob")

        self.job = self.create_job(self.recruiter, title="Backend Engineer", company="Acme", location="Remote")
        self.other_job = self.create_job(self.other_recruiter, title="Data Analyst", company="Globex")
        self.jane_resume = self.upload_text(self.jane, JANE_RESUME, "jane.txt")
        self.bob_resume = self.upload_text(self.bob, "Bob Smith. Java engineer.", "bob.txt")

    def apply(self, token, job_id, resume_id, key=None, **fields):
        payload = {"job_id": job_id, "resume_id": resume_id}
        payload.update(fields)
        return self.client.post("/api/applications", json=payload, headers=self.auth(token, key))


class TestApply(ApplicationTestCase):

    def test_apply(self):
        response = self.apply(self.jane, self.job, self.jane_resume, cover_letter="Keen to join")

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["job_id"], self.job)
        self.assertEqual(body["resume_id"], self.jane_resume)
        self.assertEqual(body["status"], "pending")
        self.assertEqual(body["message"], "Application submitted successfully")
        self.assertIsNotNone(body["applied_at"])

    def test_missing_job_id(self):
        response = self.client.post(
            "/api/applications",
            json={"resume_id": self.jane_resume},
            headers=self.auth(self.jane)
        )

        self.assertEqual(response.status_code, 400)
        error = response.json()["error"]
        self.assertEqual(error["code"], "FIELD_REQUIRED")
        self.assertEqual(error["field"], "job_id")

    def test_missing_resume_id(self):
        response = self.client.post("/api/applications", json={"job_id": self.job}, headers=self.auth(self.jane))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["field"], "resume_id")

    def test_resume_of_another_user(self):
        response = self.apply(self.jane, self.job, self.bob_resume)

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"]["message"], "Resume not found")

    def test_unknown_job(self):
        response = self.apply(self.jane, 9999, self.jane_resume)

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"]["message"], "Job not found")

    def test_apply_twice(self):
        self.apply(self.jane, self.job, self.jane_resume)
        response = self.apply(self.jane, self.job, self.jane_resume)

        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"]["code"], "ALREADY_APPLIED")

    def test_replayed_application(self):
        first = self.apply(self.jane, self.job, self.jane_resume, key="apply-1")
        second = self.apply(self.jane, self.job, self.jane_resume, key="apply-1")

        self.assertEqual(second.status_code, 201)
        self.assertEqual(first.json(), second.json())

    def test_requires_auth(self):
        response = self.client.post("/api/applications", json={"job_id": self.job, "resume_id": self.jane_resume})
        self.assertEqual(response.status_code, 401)


class TestListApplications(ApplicationTestCase):

    def setUp(self):
        super().setUp()
        self.jane_application = self.apply(self.jane, self.job, self.jane_resume).json()["id"]
        self.bob_application = self.apply(self.bob, self.other_job, self.bob_resume).json()["id"]

    def test_users_cannot_list(self):
        response = self.client.get("/api/applications", headers=self.auth(self.jane))

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["error"]["code"], "FORBIDDEN")

    def test_recruiter_sees_own_jobs_only(self):
        body = self.client.get("/api/applications", headers=self.auth(self.recruiter)).json()

        self.assertEqual(body["total"], 1)
        item = body["items"][0]
        self.assertEqual(item["id"], self.jane_application)
        self.assertEqual(item["job_title"], "Backend Engineer")
        self.assertEqual(item["company"], "Acme")
        self.assertEqual(item["applicant_name"], "Jane")
        self.assertEqual(item["applicant_email"], "jane@example.com")
        self.assertEqual(item["resume_filename"], "jane.txt")
        self.assertEqual(item["status"], "pending")

    def test_admin_sees_all_newest_first(self):
        body = self.client.get("/api/applications", headers=self.auth(self.admin)).json()

        self.assertEqual(body["total"], 2)
        self.assertEqual([item["id"] for item in body["items"]], [self.bob_application, self.jane_application])
        self.assertIsNone(body["next_offset"])

    def test_filters(self):
        by_job = self.client.get(
            "/api/applications",
            params={"job_id": self.other_job},
            headers=self.auth(self.admin)
        ).json()
        self.assertEqual([item["id"] for item in by_job["items"]], [self.bob_application])

        by_status = self.client.get(
            "/api/applications",
            params={"status": "accepted"},
            headers=self.auth(self.admin)
        ).json()
        self.assertEqual(by_status["total"], 0)

    def test_invalid_status_filter(self):
        response = self.client.get(
            "/api/applications",
            params={"status": "hired"},
            headers=self.auth(self.admin)
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["code"], "INVALID_STATUS")

    def test_my_applications(self):
        body = self.client.get("/api/applications/my-applications", headers=self.auth(self.jane)).json()

        self.assertEqual(body["total"], 1)
        item = body["items"][0]
        self.assertEqual(item["job_title"], "Backend Engineer")
        self.assertEqual(item["location"], "Remote")
        self.assertEqual(item["status"], "pending")

    def test_deleting_job_removes_its_applications(self):
        self.client.delete(f"/api/jobs/{self.job}", headers=self.auth(self.recruiter))

        body = self.client.get("/api/applications/my-applications", headers=self.auth(self.jane)).json()
        self.assertEqual(body["total"], 0)


class TestReviewApplication(ApplicationTestCase):

    def setUp(self):
        super().setUp()
        self.application = self.apply(self.jane, self.job, self.jane_resume, cover_letter="Hello").json()["id"]

    def set_status(self, token, status, notes=None):
        payload = {"status": status}
        if notes is not None:
            payload["notes"] = notes
        return self.client.patch(
            f"/api/applications/{self.application}/status",
            json=payload,
            headers=self.auth(token)
        )

    def test_update_status(self):
        response = self.set_status(self.recruiter, "accepted", notes="Strong Python background")

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "accepted")
        self.assertEqual(body["notes"], "Strong Python background")
        self.assertEqual(body["message"], "Application status updated successfully")

        mine = self.client.get("/api/applications/my-applications", headers=self.auth(self.jane)).json()
        self.assertEqual(mine["items"][0]["status"], "accepted")

        accepted = self.client.get(
            "/api/applications/my-applications",
            params={"status": "accepted"},
            headers=self.auth(self.jane)
        ).json()
        self.assertEqual(accepted["total"], 1)

    def test_invalid_status(self):
        response = self.set_status(self.recruiter, "hired")

        self.assertEqual(response.status_code, 400)
        error = response.json()["error"]
        self.assertEqual(error["code"], "INVALID_STATUS")
        self.assertEqual(error["field"], "status")

    def test_missing_status(self):
        response = self.client.patch(
            f"/api/applications/{self.application}/status",
            json={"notes": "No decision"},
            headers=self.auth(self.recruiter)
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["code"], "FIELD_REQUIRED")

    def test_recruiter_of_another_job(self):
        response = self.set_status(self.other_recruiter, "rejected")
        self.assertEqual(response.status_code, 404)

    def test_admin_may_update(self):
        self.assertEqual(self.set_status(self.admin, "reviewing").status_code, 200)

    def test_applicant_may_not_update(self):
        self.assertEqual(self.set_status(self.jane, "accepted").status_code, 403)

    def test_unknown_application(self):
        response = self.client.patch(
            "/api/applications/9999/status",
            json={"status": "reviewing"},
            headers=self.auth(self.admin)
        )
        self.assertEqual(response.status_code, 404)


class TestApplicationDetail(ApplicationTestCase):

    def setUp(self):
        super().setUp()
        self.application = self.apply(self.jane, self.job, self.jane_resume, cover_letter="Hello").json()["id"]

    def get(self, token):
        return self.client.get(f"/api/applications/{self.application}", headers=self.auth(token))

    def test_applicant_sees_redacted_resume(self):
        response = self.get(self.jane)

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["job_title"], "Backend Engineer")
        self.assertEqual(body["job_description"], "Build backend services")
        self.assertEqual(body["cover_letter"], "Hello")
        self.assertEqual(body["resume_filename"], "jane.txt")
        self.assertEqual(body["resume_content"], "Jane Doe. Python developer reachable at [EMAIL REDACTED]")

    def test_job_recruiter_sees_full_resume(self):
        body = self.get(self.recruiter).json()
        self.assertEqual(body["resume_content"], JANE_RESUME)
        self.assertEqual(body["applicant_email"], "jane@example.com")

    def test_admin_access(self):
        self.assertEqual(self.get(self.admin).status_code, 200)

    def test_other_user_forbidden(self):
        response = self.get(self.bob)

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["error"]["code"], "FORBIDDEN")

    def test_other_recruiter_forbidden(self):
        self.assertEqual(self.get(self.other_recruiter).status_code, 403)

    def test_unknown_application(self):
        response = self.client.get("/api/applications/9999", headers=self.auth(self.admin))
        self.assertEqual(response.status_code, 404)


if __name__ == '__main__':
    unittest.main()
