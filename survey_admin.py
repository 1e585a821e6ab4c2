#!/usr/bin/env python3
"""
Survey administration from the command line.

Usage:
    python survey_admin.py init                      # Create the schema
    python survey_admin.py create "Title" "A, B, C"  # Publish a survey
    python survey_admin.py list                      # List surveys, newest first
    python survey_admin.py stats TOKEN               # Weighted results
"""

import sys
from pathlib import Path

# Add project to path
sys.path.insert(0, str(Path(__file__).parent))

from app.container import container
from app.errors import StorageUnavailableError, SurveyError
from app.services.survey import rank_by_score
from settings.logging import setup_logging

logger = setup_logging(to_file=True)


def print_surveys():
    """Print all surveys."""
    items = container.surveys.list_surveys()
    if not items:
        print("\nNo surveys yet. Run 'python survey_admin.py create' first.\n")
        return

    print("\n" + "=" * 60)
    for s in items:
        created = s.created_at.strftime("%Y-%m-%d %H:%M") if s.created_at else ""
        print(f"{s.token}  {created}  {s.title}")
        print(f"        {', '.join(s.choices)}")
    print("=" * 60 + "\n")


def print_stats(token: str):
    """Print results sorted by score."""
    data = container.surveys.get_stats(token)

    print("\n" + "=" * 60)
    print(f"{data.survey.token}: {data.survey.title}")
    print("=" * 60)
    for i, s in enumerate(rank_by_score(data.stats)):
        print(f"  {i + 1}. {s.choice:<30} {s.score:>5} pts  ({s.vote_count} votes)")
    print(f"\nRespondents ({data.total_respondents}): {', '.join(data.respondents)}")
    print("=" * 60 + "\n")


def main():
    args = sys.argv[1:]
    if not args or args[0] not in ("init", "create", "list", "stats"):
        print(__doc__)
        sys.exit(1)

    try:
        container.init()
    except StorageUnavailableError as e:
        logger.error("{}", e.message)
        sys.exit(2)

    command = args[0]
    try:
        if command == "init":
            logger.info("Schema ready ({})", container.storage.dialect)
        elif command == "create":
            if len(args) != 3:
                print(__doc__)
                sys.exit(1)
            survey = container.surveys.create_survey(args[1], args[2])
            print(f"\n✅ Survey created: {survey.token}\n")
        elif command == "list":
            print_surveys()
        elif command == "stats":
            if len(args) != 2:
                print(__doc__)
                sys.exit(1)
            print_stats(args[1])
    except SurveyError as e:
        logger.error("{}", e.message)
        sys.exit(1)
    finally:
        container.close()


if __name__ == "__main__":
    main()
