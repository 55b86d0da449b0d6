"""
Schema creation and optional demo data for a fresh database.
"""
import logging
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from database.models import Base
from database.uow import uow
from core.auth import hash_password

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {'email': 'admin@resumerag.com', 'password': 'admin123', 'name': 'Admin User', 'role': 'admin'},
    {'email': 'recruiter@company.com', 'password': 'recruiter123', 'name': 'Test Recruiter', 'role': 'recruiter'},
    {'email': 'user@example.com', 'password': 'user123', 'name': 'Test User', 'role': 'user'},
]

DEMO_JOB = {
    'title': 'Senior Software Engineer',
    'description': (
        'We are looking for a Senior Software Engineer to join our team. You will be '
        'responsible for developing and maintaining our web applications using modern technologies.'
    ),
    'requirements': '5+ years experience with JavaScript/Node.js, React, SQL databases, REST APIs, Git version control',
    'company': 'TechCorp Inc.',
    'location': 'San Francisco, CA',
    'salary_range': '$120,000 - $150,000',
}


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(engine)
    logger.info("Database schema ready")


def seed_demo_data(session_factory: sessionmaker) -> bool:
    """
    Insert demo accounts and a sample job if the admin account is missing.

    Returns:
        True if data was inserted.
    """
    with uow(session_factory) as repos:
        if repos.users.email_exists(DEMO_USERS[0]['email']):
            return False

        recruiter_id = None
        for account in DEMO_USERS:
            user = repos.users.create_user(
                email=account['email'],
                password_hash=hash_password(account['password']),
                name=account['name'],
                role=account['role']
            )
            logger.info(f"Demo {account['role']} created: {account['email']}")
            if account['role'] == 'recruiter':
                recruiter_id = user.id

        repos.jobs.create_job(recruiter_id, DEMO_JOB)
        logger.info("Sample job created")
    return True


def init_db(engine: Engine, session_factory: sessionmaker, seed: bool = False) -> None:
    create_schema(engine)
    if seed:
        seed_demo_data(session_factory)
