from __future__ import annotations

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, MetaData, Table, Text

metadata = MetaData()

clients_table = Table(
    "clients",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("logo_url", Text),
    Column("city", Text),
    Column("address", Text),
    Column("state", Text),
    Column("zip", Text),
    # [longitude, latitude]
    Column("location", JSON),
    Column("created_at", DateTime),
)

events_table = Table(
    "events",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("date", DateTime, nullable=False),
    Column("start_time", DateTime),
    Column("end_time", DateTime),
    Column("address", Text),
    Column("city", Text),
    Column("state", Text),
    Column("zip_code", Text),
    Column("check_in_points", Integer, nullable=False, default=0),
    Column("review_points", Integer, nullable=False, default=0),
    Column("is_archived", Boolean, nullable=False, default=False),
    Column("is_hidden", Boolean, nullable=False, default=False),
    Column("client_id", Text, ForeignKey("clients.id")),
    Column("created_at", DateTime),
)

user_profiles_table = Table(
    "user_profiles",
    metadata,
    Column("id", Text, primary_key=True),
    Column("auth_id", Text),
    # JSON text: [{"eventId", "addedAt", "reminder24hSent", "reminder1hSent"}]
    Column("saved_event_ids", Text),
    Column("total_points", Integer, nullable=False, default=0),
    Column("tier_level", Text),
    Column("is_blocked", Boolean, nullable=False, default=False),
    Column("created_at", DateTime),
)

notifications_table = Table(
    "notifications",
    metadata,
    Column("id", Text, primary_key=True),
    Column("title", Text, nullable=False),
    Column("message", Text, nullable=False),
    Column("type", Text),
    Column("target_audience", Text, nullable=False, default="All"),
    Column("status", Text, nullable=False, default="Draft"),
    Column("scheduled_at", DateTime),
    Column("sent_at", DateTime),
    Column("recipients", Integer),
    Column("created_at", DateTime),
)

reviews_table = Table(
    "reviews",
    metadata,
    Column("id", Text, primary_key=True),
    Column("event_id", Text, ForeignKey("events.id")),
    Column("rating", Integer),
    Column("points_earned", Integer),
    Column("created_at", DateTime),
)

checkins_table = Table(
    "checkins",
    metadata,
    Column("id", Text, primary_key=True),
    Column("event_id", Text),
    Column("points", Integer),
    Column("created_at", DateTime),
)

trivia_table = Table(
    "trivia",
    metadata,
    Column("id", Text, primary_key=True),
    Column("question", Text, nullable=False),
    Column("answers", JSON, nullable=False),
    Column("correct_option_index", Integer, nullable=False),
    Column("points", Integer, nullable=False, default=0),
    Column("start_date", DateTime, nullable=False),
    Column("end_date", DateTime, nullable=False),
    Column("skipped_users", JSON),
    Column("skips", Integer),
    Column("client_id", Text),
    Column("created_at", DateTime),
)

trivia_responses_table = Table(
    "trivia_responses",
    metadata,
    Column("id", Text, primary_key=True),
    Column("trivia_id", Text, nullable=False),
    Column("user_id", Text, nullable=False),
    Column("answer", Text),
    Column("answer_index", Integer),
    Column("created_at", DateTime),
)
