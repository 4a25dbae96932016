from helpers import round_half_up
from models import MatchResult


def labels_overlap(label, other):
    """Case-insensitive substring containment in either direction.

    This is deliberately generous: "Cloud" matches "Cloud Security", and "AI"
    matches "Air Traffic Control". An empty label would match everything, but
    clean_labels drops blanks when rows are parsed, so a blank mentor skill
    never counts as overlap.
    """
    a = label.lower()
    b = other.lower()
    return a in b or b in a


def find_overlap(mentee_labels, mentor_labels):
    """Return the mentee's own labels that overlap any mentor label, in mentee order."""
    return [label for label in mentee_labels
            if any(labels_overlap(label, mentor_label) for mentor_label in mentor_labels)]


def overlap_score(mentee_labels, mentor_labels):
    if len(mentee_labels) == 0:
        return 0
    overlap = find_overlap(mentee_labels, mentor_labels)
    return round_half_up(100 * len(overlap) / len(mentee_labels))


def combine_scores(skills_score, roles_score):
    return round_half_up((skills_score + roles_score) / 2)


def score_match(mentee, mentor):
    """Score one mentor against one mentee. Pure, no I/O."""
    matching_skills = find_overlap(mentee.skills, mentor.skills)
    matching_roles = find_overlap(mentee.target_roles, mentor.specialization_roles)

    skills_score = overlap_score(mentee.skills, mentor.skills)
    roles_score = overlap_score(mentee.target_roles, mentor.specialization_roles)

    return MatchResult(
        mentee_user_id=mentee.user_id,
        mentor_id=mentor.mentor_id,
        mentor_user_id=mentor.user_id,
        mentor_name=mentor.display_name,
        skills_score=skills_score,
        roles_score=roles_score,
        compatibility_score=combine_scores(skills_score, roles_score),
        matching_skills=matching_skills,
        matching_roles=matching_roles,
        mentor_experience_level=mentor.experience_level.value if mentor.experience_level else "Unknown",
        mentor_location=mentor.location,
        mentor_hourly_rate=mentor.hourly_rate,
        mentor_availability=mentor.availability_hours_per_week,
        mentor_bio=mentor.bio,
        mentor_certifications=mentor.certifications,
    )


def score_candidates(mentee, candidates):
    return [score_match(mentee, mentor) for mentor in candidates]


def get_compatibility_level(score):
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Limited"
