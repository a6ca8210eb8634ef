# Number of leading characters of the answer key a submission has to contain.
ANSWER_MATCH_PREFIX_LENGTH = 20

# Namespace for pg_advisory_xact_lock(int, int) so leaderboard locks cannot
# collide with other advisory locks taken against the same database.
LEADERBOARD_LOCK_NAMESPACE = 7301

MIN_LEADERBOARD_LIMIT = 1
