import logging

from pydantic import ValidationError

import matching_config
from errors import ProfileMissingError, ReviewNotAllowedError, InvalidTestimonialError
from models import Testimonial, TestimonialStats
from persistent_storage import (get_mentor_testimonial_stats, get_mentor_testimonials as fetch_testimonial_rows,
                                can_write_testimonial as check_can_write, get_existing_testimonial,
                                create_testimonial, update_testimonial, get_mentee_by_user_id, get_user_by_id)

logger = logging.getLogger(__name__)


def as_rows(data):
    # RPCs returning a single row come back as one object rather than a list
    if isinstance(data, dict):
        return [data]
    return list(data or [])


def get_mentor_stats(session, mentor_id):
    """Rating summary for a mentor.

    A mentor with no reviews gets all zeros, and so does a stats row that
    cannot be read.
    """
    rows = as_rows(get_mentor_testimonial_stats(session.client, mentor_id))
    if not rows:
        return TestimonialStats()
    try:
        return TestimonialStats.model_validate(rows[0])
    except ValidationError as e:
        logger.warning(f"Ignoring unreadable rating stats for mentor {mentor_id}: {e.error_count()} invalid field(s)")
        return TestimonialStats()


def parse_testimonials(rows):
    testimonials = []
    for row in as_rows(rows):
        try:
            testimonials.append(Testimonial.model_validate(row))
        except ValidationError as e:
            row_id = row.get('id', 'N/A') if isinstance(row, dict) else 'N/A'
            logger.warning(f"Skipping testimonial {row_id}: {e.error_count()} invalid field(s)")
    return testimonials


def get_mentor_testimonials(session, mentor_id, limit=None, offset=0):
    limit = limit if limit is not None else matching_config.TESTIMONIAL_PAGE_SIZE
    return parse_testimonials(fetch_testimonial_rows(session.client, mentor_id, limit, offset))


class MentorReviews:
    """Stats plus an incrementally loaded list of testimonials for one mentor."""

    def __init__(self, session, mentor_id, page_size=None):
        self.session = session
        self.mentor_id = mentor_id
        self.page_size = page_size or matching_config.TESTIMONIAL_PAGE_SIZE
        self.stats = TestimonialStats()
        self.testimonials = []
        self.offset = 0
        self.has_more = True

    def load(self):
        self.stats = get_mentor_stats(self.session, self.mentor_id)
        self.testimonials = []
        self.offset = 0
        self.has_more = True
        self.load_more()
        return self

    def load_more(self):
        if not self.has_more:
            return []

        rows = as_rows(fetch_testimonial_rows(self.session.client, self.mentor_id, self.page_size, self.offset))
        page = parse_testimonials(rows)
        self.offset += len(rows)
        self.has_more = len(rows) == self.page_size
        self.testimonials.extend(page)
        return page


def can_write_testimonial(session, mentor_id, mentee_id):
    return check_can_write(session.client, mentor_id, mentee_id)


def validate_testimonial(testimonial_text, rating):
    text_length = len(testimonial_text or '')
    if text_length < matching_config.TESTIMONIAL_MIN_LENGTH:
        raise InvalidTestimonialError(
            f"Please write at least {matching_config.TESTIMONIAL_MIN_LENGTH} characters.")
    if text_length > matching_config.TESTIMONIAL_MAX_LENGTH:
        raise InvalidTestimonialError(
            f"Reviews are limited to {matching_config.TESTIMONIAL_MAX_LENGTH} characters.")
    if not isinstance(rating, int) or isinstance(rating, bool) or not 1 <= rating <= 5:
        raise InvalidTestimonialError("Please choose a rating between 1 and 5 stars.")


def submit_testimonial(session, mentor_id, testimonial_text, rating):
    """Create the mentee's review of a mentor, or edit it while still unapproved.

    Returns "created" or "updated".
    """
    validate_testimonial(testimonial_text, rating)

    db_user = get_user_by_id(session.client, session.user_id)
    if not db_user or db_user.get('user_type') != 'mentee':
        raise ReviewNotAllowedError("Only students can write testimonials for mentors.")

    db_mentee = get_mentee_by_user_id(session.client, session.user_id)
    mentee_id = db_mentee.get('menteeid') if db_mentee else None
    if mentee_id is None:
        raise ProfileMissingError(session.user_id, "Could not find your student profile.")

    existing = get_existing_testimonial(session.client, mentor_id, mentee_id)
    if existing:
        if existing.get('is_approved'):
            raise ReviewNotAllowedError("You have already submitted a review for this mentor.")
        update_testimonial(session.client, existing['id'],
                           {'testimonial_text': testimonial_text, 'rating': rating})
        logger.info(f"Updated review {existing['id']} for mentor {mentor_id}")
        return "updated"

    create_testimonial(session.client, {
        'mentor_id': mentor_id,
        'mentee_id': mentee_id,
        'testimonial_text': testimonial_text,
        'rating': rating,
    })
    logger.info(f"Mentee {mentee_id} reviewed mentor {mentor_id}")
    return "created"
