"""CLI entry point for scoring, ranking, teasers, invites and suppression checks."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from event_match.config import AppConfig, load_config, validate_config
from event_match.matching.matcher import generate_matches
from event_match.matching.scorer import explain_score
from event_match.models import Base, make_engine, make_session_factory
from event_match.notifications.email_sender import send_email
from event_match.notifications.invites import InviteOutcome
from event_match.notifications.templates import render_opt_out_email
from event_match.pipeline import run_invite
from event_match.privacy.anonymizer import anonymize_profile
from event_match.privacy.consent import EmailHasher, SuppressionGate, SuppressionStatus
from event_match.profile.models import ProfileAttributes, SeededProfile
from event_match.storage.profile_store import SqlProfileStore
from event_match.storage.suppression_store import SqlSuppressionStore, record_opt_out
from event_match.utils.logging_config import setup_logging

logger = logging.getLogger("event_match")

EXIT_LOOKUP_FAILED = 2

# Commands that may create the database and its tables
WRITE_COMMANDS = ("seed", "opt-out", "init-db")


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Event Match - compatibility scoring and privacy-safe previews",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to config file (default: environment and built-in defaults)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    score = sub.add_parser("score", help="Score two profile attribute files")
    score.add_argument("profile_a")
    score.add_argument("profile_b")

    match = sub.add_parser("match", help="Rank a pool of seeded profiles for one profile")
    match.add_argument("--id", required=True, help="Id of the profile to match for")
    match.add_argument("--pool", default=None, help="JSON file with a list of {id, attributes} (default: database)")
    match.add_argument("--event", default=None, help="Restrict the database pool to one event")
    match.add_argument("--limit", type=int, default=None)
    match.add_argument("--workers", type=int, default=None)

    seed = sub.add_parser("seed", help="Load a JSON pool of profiles into the database")
    seed.add_argument("pool", help="JSON file with a list of {id, attributes}")
    seed.add_argument("--event", default=None)

    invite = sub.add_parser("invite", help="Send an invite previewing a profile's top matches")
    invite.add_argument("email")
    invite.add_argument("--id", required=True, help="Id of the invitee's seeded profile")
    invite.add_argument("--event", default=None)
    invite.add_argument("--event-name", default="our next event")
    invite.add_argument("--limit", type=int, default=None)

    teaser = sub.add_parser("teaser", help="Print the anonymized teaser view of a profile")
    teaser.add_argument("profile")

    hash_cmd = sub.add_parser("hash-email", help="Print the salted hash of an email")
    hash_cmd.add_argument("email")

    check = sub.add_parser("check-suppression", help="Check whether an email is suppressed")
    check.add_argument("email")

    opt_out = sub.add_parser("opt-out", help="Add an email to the suppression list")
    opt_out.add_argument("email")

    sub.add_parser("init-db", help="Create database tables")

    return parser.parse_args(argv)


def _read_json(path: str):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _print_json(data) -> None:
    print(json.dumps(data, indent=2))


def _session_factory(config: AppConfig, create_tables: bool = False):
    engine = make_engine(config.database_url)
    if create_tables:
        Base.metadata.create_all(engine)
    return make_session_factory(engine)


def _email_configured(config: AppConfig) -> bool:
    return bool(config.email.sender_email and config.email.sender_password)


def run_command(args: argparse.Namespace, config: AppConfig) -> int:
    """Execute one subcommand and return the process exit code."""
    hasher = EmailHasher(config.privacy.email_salt)

    if args.command == "score":
        a = ProfileAttributes.from_dict(_read_json(args.profile_a))
        b = ProfileAttributes.from_dict(_read_json(args.profile_b))
        breakdown = explain_score(a, b)
        _print_json({
            "score": breakdown.total,
            "industry": breakdown.industry,
            "role": breakdown.role,
            "goals": breakdown.goals,
            "skills": breakdown.skills,
            "location": breakdown.location,
            "reason": breakdown.reason,
        })
        return 0

    if args.command == "match":
        if args.pool:
            pool = [SeededProfile.from_dict(d) for d in _read_json(args.pool)]
        else:
            pool = SqlProfileStore(_session_factory(config)).get_pool(args.event)
        profile = next((p for p in pool if str(p.id) == args.id), None)
        if profile is None:
            print(f"Error: profile {args.id} not found in {args.pool or 'database'}", file=sys.stderr)
            return 1
        limit = args.limit if args.limit is not None else config.matching.default_limit
        workers = args.workers if args.workers is not None else config.matching.max_workers
        matches = generate_matches(
            profile, pool, limit=limit, max_workers=workers, min_score=config.matching.min_score,
        )
        _print_json([m.to_dict() for m in matches])
        return 0

    if args.command == "seed":
        store = SqlProfileStore(_session_factory(config, create_tables=True))
        profiles = [SeededProfile.from_dict(d) for d in _read_json(args.pool)]
        for profile in profiles:
            store.add(profile, event_id=args.event)
        logger.info("Seeded %d profiles (event=%s)", len(profiles), args.event or "none")
        print(len(profiles))
        return 0

    if args.command == "invite":
        # no create_all: a missing suppression table must read as lookup_failed
        session_factory = _session_factory(config)
        run = run_invite(
            args.email,
            args.id,
            args.event_name,
            config,
            SqlProfileStore(session_factory),
            SuppressionGate(SqlSuppressionStore(session_factory)),
            hasher,
            event_id=args.event,
            limit=args.limit,
        )
        _print_json(run.to_dict())
        if run.outcome is InviteOutcome.LOOKUP_FAILED:
            return EXIT_LOOKUP_FAILED
        return 1 if run.outcome is InviteOutcome.SEND_FAILED else 0

    if args.command == "teaser":
        profile = ProfileAttributes.from_dict(_read_json(args.profile))
        _print_json(anonymize_profile(profile).to_dict())
        return 0

    if args.command == "hash-email":
        print(hasher.hash(args.email))
        return 0

    if args.command == "check-suppression":
        gate = SuppressionGate(SqlSuppressionStore(_session_factory(config)))
        status = gate.check(hasher.hash(args.email))
        print(status.value)
        return EXIT_LOOKUP_FAILED if status is SuppressionStatus.LOOKUP_FAILED else 0

    if args.command == "opt-out":
        store = SqlSuppressionStore(_session_factory(config, create_tables=True))
        email_hash = record_opt_out(args.email, hasher, store)
        print(email_hash)
        if _email_configured(config):
            subject, html = render_opt_out_email()
            send_email(config.email, args.email, subject, html)
        else:
            logger.info("Email not configured, skipping opt-out confirmation")
        return 0

    if args.command == "init-db":
        _session_factory(config, create_tables=True)
        logger.info("Database tables created")
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_dir)

    for w in validate_config(config):
        logger.warning("Config: %s", w)

    if config.database_url.startswith("sqlite:///") and args.command in WRITE_COMMANDS:
        db_file = config.database_url[len("sqlite:///"):]
        if db_file and db_file != ":memory:":
            Path(db_file).parent.mkdir(parents=True, exist_ok=True)

    try:
        return run_command(args, config)
    except Exception as e:
        logger.error("Command %s failed: %s: %s", args.command, type(e).__name__, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
