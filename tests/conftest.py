"""
Pytest configuration and fixtures.

Every test runs against tests/mocks/supabase_mocks.FakeSupabase; nothing
here talks to a real backend.
"""

import pytest

from session import Session
from tests.mocks.supabase_mocks import FakeSupabase, mentor_row

MENTEE_USER_ID = "09c6b04d-bcc4-479a-a319-6230ec8be743"


@pytest.fixture
def mentee_row():
    return {
        'menteeid': 1,
        'user_id': MENTEE_USER_ID,
        'skills': ["Cloud Security", "Ethical Hacking"],
        'target_roles': ["Security Analyst", "Penetration Tester"],
        'current_level': 'Beginner',
        'learning_goals': "Learn practical cybersecurity skills",
        'study_level': 'Undergraduate',
        'field': 'Computer Science',
    }


@pytest.fixture
def user_row():
    return {
        'id': MENTEE_USER_ID,
        'name': "Demo Student",
        'bio': "Aspiring cybersecurity professional",
        'location': "Melbourne, AU",
        'user_type': 'mentee',
    }


@pytest.fixture
def supabase(mentee_row, user_row):
    client = FakeSupabase({
        'mentees': [mentee_row],
        'users': [user_row],
        'mentors': [
            mentor_row(1, skills=["cloud", "incident response"], roles=["SOC Analyst"]),
            mentor_row(2, skills=["Ethical Hacking", "Cloud Security Architecture"],
                       roles=["Penetration Tester", "Security Analyst"]),
            mentor_row(3, skills=["Governance"], roles=["CISO"], active=False),
        ],
        'mentorship_requests': [],
        'testimonials': [],
        'mentor_votes': [],
    })
    client.auth.user_id = MENTEE_USER_ID
    return client


@pytest.fixture
def session(supabase):
    return Session(client=supabase, user_id=MENTEE_USER_ID)
