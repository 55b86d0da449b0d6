"""Business logic services."""

from .auth_service import AuthService
from .resume_service import ResumeService
from .job_service import JobService
from .match_service import MatchService
from .search_service import SearchService
from .idempotency_service import IdempotencyService
from .audit_sink import DatabaseAuditSink
from .application_service import ApplicationService
from .admin_service import AdminService
