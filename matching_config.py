import os
from pathlib import Path

from dotenv import load_dotenv

env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)

SUPABASE_URL = os.environ.get("SUPABASE_URL")
SUPABASE_KEY = os.environ.get("SUPABASE_KEY")
SUPABASE_SCHEMA = os.environ.get("SUPABASE_SCHEMA", "public")

MATCH_CANDIDATE_LIMIT = int(os.environ.get("MATCH_CANDIDATE_LIMIT", "5"))
MATCH_SOURCE = os.environ.get("MATCH_SOURCE", "local")
MATCH_VERIFIED_ONLY = os.environ.get("MATCH_VERIFIED_ONLY", "false").lower() in ("1", "true", "yes")
TESTIMONIAL_PAGE_SIZE = int(os.environ.get("TESTIMONIAL_PAGE_SIZE", "5"))
MATCH_REVIEW_PREVIEW = 3

TESTIMONIAL_MIN_LENGTH = 10
TESTIMONIAL_MAX_LENGTH = 500

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FORMAT = '%(asctime)s:%(levelname)s:%(message)s'
