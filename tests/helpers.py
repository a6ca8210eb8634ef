from app.models.domain import LeaderboardEntry, Participant, Round, Submission

RECURSION_KEY = "recursion causes stack overflow when base case missing"


async def add_participant(db, **overrides) -> Participant:
    values = {
        "team_name": "Null Pointers",
        "participant_name": "Ada",
        "email": "ada@example.com",
        "phone": "+15550001",
        "language": "python",
        "experience": "intermediate",
        "team_type": "solo",
    }
    values.update(overrides)
    row = Participant(**values)
    db.add(row)
    await db.commit()
    return row


async def add_round(db, **overrides) -> Round:
    values = {
        "round_number": 1,
        "title": "Runaway recursion",
        "description": "def fact(n): return n * fact(n - 1)",
        "language": "python",
        "difficulty": "medium",
        "points": 20,
        "hint": "When does it stop?",
        "time_limit": 180,
        "correct_answer": RECURSION_KEY,
        "explanation": "The function has no base case.",
        "is_active": True,
    }
    values.update(overrides)
    row = Round(**values)
    db.add(row)
    await db.commit()
    return row


async def add_submission(db, participant_id: int, round_id: int, points: int, time_taken: int | None):
    row = Submission(
        participant_id=participant_id,
        round_id=round_id,
        answer="seeded",
        is_correct=points > 0,
        points_earned=points,
        time_taken=time_taken,
    )
    db.add(row)
    await db.commit()
    return row


async def add_entry(db, participant: Participant, total_points: int, average_time: float) -> LeaderboardEntry:
    row = LeaderboardEntry(
        participant_id=participant.id,
        team_name=participant.team_name,
        participant_name=participant.participant_name,
        language=participant.language,
        total_points=total_points,
        rounds_completed=1,
        average_time=average_time,
    )
    db.add(row)
    await db.commit()
    return row
