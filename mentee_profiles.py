import logging

from pydantic import ValidationError

from errors import ProfileMissingError
from helpers import clean_labels
from models import MenteeProfile, SkillLevel
from persistent_storage import get_mentee_by_user_id, get_user_by_id, upsert_mentee_skills

logger = logging.getLogger(__name__)


def build_fallback_profile(user_id, db_user):
    """Minimal profile for a user without a mentees row."""
    db_user = db_user or {}
    return MenteeProfile(
        user_id=user_id,
        name=db_user.get('name'),
        bio=db_user.get('bio'),
        location=db_user.get('location'),
        skills=[],
        target_roles=[],
        current_level=SkillLevel.BEGINNER,
        is_fallback=True,
    )


def load_mentee_profile(session):
    """Load the signed-in user's mentee profile.

    Backend failures raise FetchFailedError and are not retried here. A
    mentees row that cannot be read raises ProfileMissingError.
    """
    supabase = session.client
    user_id = session.user_id

    db_mentee = get_mentee_by_user_id(supabase, user_id)
    db_user = get_user_by_id(supabase, user_id)

    if db_mentee is None:
        logger.warning(f"User {user_id} has no mentee profile, using account details instead.")
        return build_fallback_profile(user_id, db_user)

    mentee_row = dict(db_mentee)
    mentee_row['user_id'] = mentee_row.get('user_id') or user_id
    if db_user:
        for key in ('name', 'bio', 'location'):
            mentee_row[key] = db_user.get(key)

    try:
        return MenteeProfile.model_validate(mentee_row)
    except ValidationError as e:
        logger.error(f"Unreadable mentee profile for user {user_id}: {e.error_count()} invalid field(s)")
        raise ProfileMissingError(user_id, "Your mentee profile could not be read.") from e


def save_mentee_skills(session, skills):
    cleaned = clean_labels(skills)
    upsert_mentee_skills(session.client, session.user_id, cleaned)
    logger.info(f"Saved {len(cleaned)} skills for user {session.user_id}")
    return cleaned
