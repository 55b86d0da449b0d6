"""API route handlers."""

from .auth import router as auth_router
from .resumes import router as resumes_router
from .jobs import router as jobs_router
from .search import router as search_router
from .applications import router as applications_router
from .admin import router as admin_router
