import logging

import pandas as pd
from supabase import create_client, Client
from supabase.lib.client_options import ClientOptions

import matching_config
from errors import FetchFailedError

logger = logging.getLogger(__name__)

MENTEE_COLUMNS = 'menteeid, user_id, skills, target_roles, current_level, learning_goals, study_level, field'
USER_COLUMNS = 'id, name, bio, location, user_type'
MENTOR_COLUMNS = ('mentorid, userid, name, bio, hourly_rate, skills, specialization_roles, experience_level, '
                  'years_of_experience, availability_hours_per_week, certifications, location, active, verified, '
                  'upvotes, downvotes')
REQUEST_COLUMNS = 'id, mentee_id, mentor_id, status, message, response_message, created_at'


def convert_to_int(value):
    try:
        if pd.isna(value):
            return None
        return int(float(value))
    except (ValueError, TypeError):
        return None


def get_supabase_client():
    supabase_url = matching_config.SUPABASE_URL
    supabase_key = matching_config.SUPABASE_KEY
    if not supabase_url or not supabase_key:
        raise ValueError("Environment variables SUPABASE_URL and SUPABASE_KEY must be set.")

    opts = ClientOptions().replace(schema=matching_config.SUPABASE_SCHEMA)
    supabase: Client = create_client(supabase_url, supabase_key, options=opts)

    return supabase


def run_query(query, operation):
    """Execute a built query, converting any backend failure to FetchFailedError."""
    try:
        return query.execute()
    except Exception as e:
        logger.error(f"Error trying to {operation}: {e}")
        raise FetchFailedError(operation) from e


def first_row(response):
    if response.data:
        return response.data[0]
    return None


# Auth

def get_auth_session(supabase):
    try:
        return supabase.auth.get_session()
    except Exception as e:
        logger.error(f"Error reading auth session: {e}")
        raise FetchFailedError("read your session") from e


def sign_in_with_password(supabase, email, password):
    try:
        return supabase.auth.sign_in_with_password({'email': email, 'password': password})
    except Exception as e:
        logger.error(f"Error signing in {email}: {e}")
        raise FetchFailedError("sign in") from e


# Users and mentees

def get_user_by_id(supabase, user_id):
    response = run_query(supabase.table('users')
                         .select(USER_COLUMNS)
                         .eq('id', user_id)
                         .limit(1), "load your account")
    return first_row(response)


def get_mentee_by_user_id(supabase, user_id):
    response = run_query(supabase.table('mentees')
                         .select(MENTEE_COLUMNS)
                         .eq('user_id', user_id)
                         .limit(1), "load your mentee profile")
    return first_row(response)


def upsert_mentee_skills(supabase, user_id, skills):
    response = run_query(supabase.table('mentees')
                         .upsert({'user_id': user_id, 'skills': skills}, on_conflict='user_id'),
                         "save your skills")
    return first_row(response)


# Mentors

def get_active_mentors(supabase, limit, verified_only=False):
    query = (supabase.table('mentors')
             .select(MENTOR_COLUMNS)
             .eq('active', True))
    if verified_only:
        query = query.eq('verified', True)

    response = run_query(query.limit(limit), "load mentors")
    return response.data or []


def get_matches(supabase, mentee_user_id):
    response = run_query(supabase.rpc('get_matches', {'mentee_userid': mentee_user_id}),
                         "find mentor matches")
    return response.data or []


def get_mentor_votes(supabase, mentor_id):
    response = run_query(supabase.table('mentor_votes')
                         .select('vote')
                         .eq('mentorid', mentor_id), "count mentor votes")
    return response.data or []


def get_votes_by_user(supabase, user_id):
    response = run_query(supabase.table('mentor_votes')
                         .select('mentorid, vote')
                         .eq('userid', user_id), "load your votes")
    return response.data or []


def upsert_mentor_vote(supabase, mentor_id, user_id, vote):
    row = {'mentorid': mentor_id, 'userid': user_id, 'vote': vote}
    return run_query(supabase.table('mentor_votes').upsert(row, on_conflict='mentorid,userid'),
                     "save your vote")


def delete_mentor_vote(supabase, mentor_id, user_id):
    return run_query(supabase.table('mentor_votes')
                     .delete()
                     .eq('mentorid', mentor_id)
                     .eq('userid', user_id), "remove your vote")


def update_mentor_vote_counts(supabase, mentor_id, upvotes, downvotes):
    return run_query(supabase.table('mentors')
                     .update({'upvotes': upvotes, 'downvotes': downvotes})
                     .eq('mentorid', mentor_id), "update mentor votes")


# Mentorship requests

def get_mentorship_requests(supabase, mentee_id, statuses):
    # status casing differs between older and newer rows
    status_values = sorted({s for status in statuses for s in (status.lower(), status.capitalize())})
    response = run_query(supabase.table('mentorship_requests')
                         .select(REQUEST_COLUMNS)
                         .eq('mentee_id', mentee_id)
                         .in_('status', status_values), "check your existing mentorship requests")
    return response.data or []


def create_mentorship_request(supabase, request_row):
    response = run_query(supabase.table('mentorship_requests').insert(request_row),
                         "send your mentorship request")
    return first_row(response)


def update_mentorship_request(supabase, request_id, updates):
    response = run_query(supabase.table('mentorship_requests')
                         .update(updates)
                         .eq('id', request_id), "update the mentorship request")
    return first_row(response)


# Testimonials

def get_mentor_testimonial_stats(supabase, mentor_id):
    response = run_query(supabase.rpc('get_mentor_testimonial_stats', {'mentor_id_param': mentor_id}),
                         "load mentor ratings")
    return response.data or []


def get_mentor_testimonials(supabase, mentor_id, limit, offset):
    params = {'mentor_id_param': mentor_id, 'limit_param': limit, 'offset_param': offset}
    response = run_query(supabase.rpc('get_mentor_testimonials', params), "load mentor testimonials")
    return response.data or []


def can_write_testimonial(supabase, mentor_id, mentee_id):
    params = {'mentor_id_param': mentor_id, 'mentee_id_param': mentee_id}
    response = run_query(supabase.rpc('can_write_testimonial', params), "check review eligibility")
    return response.data is True


def get_existing_testimonial(supabase, mentor_id, mentee_id):
    response = run_query(supabase.table('testimonials')
                         .select('*')
                         .eq('mentor_id', mentor_id)
                         .eq('mentee_id', mentee_id)
                         .limit(1), "look up your existing review")
    return first_row(response)


def create_testimonial(supabase, testimonial_row):
    response = run_query(supabase.table('testimonials').insert(testimonial_row), "submit your review")
    return first_row(response)


def update_testimonial(supabase, testimonial_id, updates):
    # approved reviews are locked
    response = run_query(supabase.table('testimonials')
                         .update(updates)
                         .eq('id', testimonial_id)
                         .eq('is_approved', False), "update your review")
    return first_row(response)
