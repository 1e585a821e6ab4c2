"""Ranked-choice scoring - pure functions, no storage access."""

from collections.abc import Iterable, Sequence

from app.models.survey import ChoiceScore, Response, Survey, SurveyStats, Vote


def score_choices(choices: Sequence[str], ballots: Iterable[Sequence[Vote]]) -> list[ChoiceScore]:
    """Weighted score and vote count per choice, in the survey's choice order.

    A ballot with m entries gives (m - rank + 1) points to each ranked choice,
    so its top choice weighs m and its last one weighs 1. Votes for choices
    outside ``choices`` are ignored.
    """
    scores = {c: 0 for c in choices}
    counts = {c: 0 for c in choices}

    for votes in ballots:
        m = len(votes)
        for vote in votes:
            if not isinstance(vote.choice, str) or vote.choice not in scores or not isinstance(vote.rank, int):
                continue
            scores[vote.choice] += m - vote.rank + 1
            counts[vote.choice] += 1

    return [ChoiceScore(choice=c, score=scores[c], vote_count=counts[c]) for c in choices]


def compute_stats(survey: Survey, responses: Sequence[Response]) -> SurveyStats:
    """Aggregate all responses of a survey."""
    return SurveyStats(
        survey=survey,
        stats=score_choices(survey.choices, (r.votes for r in responses)),
        total_respondents=len(responses),
        respondents=[r.pseudonym for r in responses],
    )


def rank_by_score(stats: Sequence[ChoiceScore]) -> list[ChoiceScore]:
    """Stats sorted by score, highest first. Ties keep choice order."""
    return sorted(stats, key=lambda s: s.score, reverse=True)
