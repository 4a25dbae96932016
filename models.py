# models.py
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from helpers import clean_labels


class SkillLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class ExperienceLevel(str, Enum):
    MID_LEVEL = "Mid-level"
    SENIOR = "Senior"
    EXPERT = "Expert"
    PRINCIPAL = "Principal"
    EXECUTIVE = "Executive"


class RequestStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


def _match_enum(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    if value is None:
        return None
    text = str(value).strip().lower()
    for member in enum_cls:
        if member.value.lower() == text:
            return member
    return None


class MenteeProfile(BaseModel):
    mentee_id: Optional[int] = Field(default=None, validation_alias=AliasChoices('mentee_id', 'menteeid'))
    user_id: str = Field(validation_alias=AliasChoices('user_id', 'auth_userid'))
    name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    target_roles: List[str] = Field(default_factory=list)
    current_level: SkillLevel = SkillLevel.BEGINNER
    learning_goals: Optional[str] = None
    study_level: Optional[str] = None
    field: Optional[str] = None

    # True when no mentees row exists and the profile was built from account data
    is_fallback: bool = False

    @field_validator('skills', 'target_roles', mode='before')
    @classmethod
    def _clean_labels(cls, value):
        return clean_labels(value)

    @field_validator('current_level', mode='before')
    @classmethod
    def _default_level(cls, value):
        return _match_enum(SkillLevel, value) or SkillLevel.BEGINNER


class MentorCandidate(BaseModel):
    mentor_id: int = Field(validation_alias=AliasChoices('mentor_id', 'mentorid'))
    user_id: Optional[str] = Field(default=None, validation_alias=AliasChoices('user_id', 'userid'))
    name: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    specialization_roles: List[str] = Field(default_factory=list)
    experience_level: Optional[ExperienceLevel] = None
    years_of_experience: Optional[int] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    availability_hours_per_week: Optional[float] = Field(default=None, ge=0)
    bio: Optional[str] = None
    certifications: List[str] = Field(default_factory=list)
    location: Optional[str] = None
    active: bool = False
    verified: bool = False
    upvotes: int = 0
    downvotes: int = 0

    @field_validator('skills', 'specialization_roles', 'certifications', mode='before')
    @classmethod
    def _clean_labels(cls, value):
        return clean_labels(value)

    @field_validator('experience_level', mode='before')
    @classmethod
    def _known_level(cls, value):
        return _match_enum(ExperienceLevel, value)

    @field_validator('active', 'verified', mode='before')
    @classmethod
    def _null_is_false(cls, value):
        return bool(value)

    @field_validator('upvotes', 'downvotes', mode='before')
    @classmethod
    def _null_is_zero(cls, value):
        return value or 0

    @property
    def display_name(self):
        return self.name or f"Mentor {self.mentor_id}"


class TestimonialStats(BaseModel):
    total_reviews: int = 0
    average_rating: float = 0.0
    rating_1: int = 0
    rating_2: int = 0
    rating_3: int = 0
    rating_4: int = 0
    rating_5: int = 0

    @field_validator('total_reviews', 'average_rating', 'rating_1', 'rating_2', 'rating_3', 'rating_4', 'rating_5',
                     mode='before')
    @classmethod
    def _null_is_zero(cls, value):
        return value or 0

    @property
    def rating_distribution(self):
        return [self.rating_1, self.rating_2, self.rating_3, self.rating_4, self.rating_5]


class Testimonial(BaseModel):
    id: str
    testimonial_text: str
    rating: int = Field(ge=1, le=5)
    created_at: Optional[datetime] = None
    is_featured: bool = False
    mentee_name: Optional[str] = None
    mentee_avatar_url: Optional[str] = None

    @field_validator('id', mode='before')
    @classmethod
    def _id_as_str(cls, value):
        return str(value)

    @field_validator('is_featured', mode='before')
    @classmethod
    def _null_is_false(cls, value):
        return bool(value)


class MatchResult(BaseModel):
    """One scored mentee/mentor pairing. Derived per session, never persisted."""
    mentee_user_id: Optional[str] = None
    mentor_id: int
    mentor_user_id: Optional[str] = None
    mentor_name: str

    skills_score: int = Field(ge=0, le=100)
    roles_score: int = Field(ge=0, le=100)
    compatibility_score: int = Field(ge=0, le=100)
    matching_skills: List[str] = Field(default_factory=list)
    matching_roles: List[str] = Field(default_factory=list)

    mentor_experience_level: str = "Unknown"
    mentor_location: Optional[str] = None
    mentor_hourly_rate: Optional[float] = None
    mentor_availability: Optional[float] = None
    mentor_bio: Optional[str] = None
    mentor_certifications: List[str] = Field(default_factory=list)

    testimonial_stats: Optional[TestimonialStats] = None
    testimonials: List[Testimonial] = Field(default_factory=list)

    @field_validator('matching_skills', 'matching_roles', 'mentor_certifications', mode='before')
    @classmethod
    def _clean_labels(cls, value):
        return clean_labels(value)

    @property
    def skill_overlap_count(self):
        return len(self.matching_skills)

    @property
    def role_overlap_count(self):
        return len(self.matching_roles)


class MentorshipRequest(BaseModel):
    id: Optional[str] = None
    mentee_id: int
    mentor_id: int
    status: RequestStatus = RequestStatus.PENDING
    message: Optional[str] = None
    response_message: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator('id', mode='before')
    @classmethod
    def _id_as_str(cls, value):
        return None if value is None else str(value)

    @field_validator('status', mode='before')
    @classmethod
    def _lowercase_status(cls, value):
        # rows written by older clients use "Pending" / "Accepted"
        status = _match_enum(RequestStatus, value)
        if status is None:
            raise ValueError(f"Unknown mentorship request status: {value!r}")
        return status


class VoteTally(BaseModel):
    mentor_id: int
    upvotes: int = 0
    downvotes: int = 0
    user_vote: int = 0
