"""
Tests for row validation at the backend boundary.
"""
import pytest
from pydantic import ValidationError

import models
from models import MenteeProfile, MentorCandidate, MentorshipRequest, RequestStatus, SkillLevel, ExperienceLevel


def test_mentee_defaults_unknown_level_to_beginner():
    mentee = MenteeProfile.model_validate({'user_id': 'u1', 'current_level': 'Guru'})
    assert mentee.current_level == SkillLevel.BEGINNER


def test_mentee_level_is_case_insensitive():
    mentee = MenteeProfile.model_validate({'user_id': 'u1', 'current_level': 'advanced'})
    assert mentee.current_level == SkillLevel.ADVANCED


def test_mentee_null_lists_become_empty():
    mentee = MenteeProfile.model_validate({'menteeid': 4, 'user_id': 'u1', 'skills': None, 'target_roles': None})
    assert mentee.mentee_id == 4
    assert mentee.skills == []
    assert mentee.target_roles == []


def test_labels_are_cleaned():
    mentee = MenteeProfile.model_validate({
        'user_id': 'u1',
        'skills': ["  Cloud  Security ", "", None, "Cloud Security", "Forensics"],
    })
    assert mentee.skills == ["Cloud Security", "Forensics"]


def test_mentor_accepts_either_user_column():
    assert MentorCandidate.model_validate({'mentorid': 1, 'userid': 'a'}).user_id == 'a'
    assert MentorCandidate.model_validate({'mentorid': 1, 'user_id': 'b'}).user_id == 'b'


def test_mentor_unknown_experience_level_is_none():
    mentor = MentorCandidate.model_validate({'mentorid': 1, 'experience_level': 'Wizard'})
    assert mentor.experience_level is None

    mentor = MentorCandidate.model_validate({'mentorid': 1, 'experience_level': 'mid-level'})
    assert mentor.experience_level == ExperienceLevel.MID_LEVEL


def test_mentor_rejects_negative_rate():
    with pytest.raises(ValidationError):
        MentorCandidate.model_validate({'mentorid': 1, 'hourly_rate': -5})


def test_mentor_null_flags_and_counters():
    mentor = MentorCandidate.model_validate({'mentorid': 1, 'active': None, 'upvotes': None})
    assert mentor.active is False
    assert mentor.upvotes == 0
    assert mentor.display_name == "Mentor 1"


def test_request_status_is_normalised():
    request = MentorshipRequest.model_validate({'id': 5, 'mentee_id': 1, 'mentor_id': 2, 'status': 'Pending'})
    assert request.status == RequestStatus.PENDING
    assert request.id == '5'


def test_request_rejects_unknown_status():
    with pytest.raises(ValidationError):
        MentorshipRequest.model_validate({'mentee_id': 1, 'mentor_id': 2, 'status': 'archived'})


def test_stats_nulls_become_zero():
    stats = models.TestimonialStats.model_validate({'total_reviews': None, 'average_rating': '4.5', 'rating_5': 2})
    assert stats.total_reviews == 0
    assert stats.average_rating == 4.5
    assert stats.rating_distribution == [0, 0, 0, 0, 2]


def test_match_result_bounds():
    with pytest.raises(ValidationError):
        models.MatchResult(mentor_id=1, mentor_name="x", skills_score=120, roles_score=0, compatibility_score=60)
