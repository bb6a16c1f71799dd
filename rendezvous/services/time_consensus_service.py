"""Time consensus resolution over participant availability grids."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from rendezvous.domain.models import ParticipantSubmission, TimeResolution, TimeSlotId
from rendezvous.domain.ranking import rank_time_resolutions
from rendezvous.utils.logger import get_logger


logger = get_logger(__name__)


def count_slot_support(submissions: Sequence[ParticipantSubmission]) -> Counter[TimeSlotId]:
    """Sparse histogram of how many submissions include each slot.

    Only slots someone selected are visited, so the cost follows the number of
    selections rather than the grid size.
    """
    support: Counter[TimeSlotId] = Counter()
    for submission in submissions:
        support.update(set(submission.availability))
    return support


def resolve_time_consensus(
    submissions: Sequence[ParticipantSubmission],
) -> list[TimeResolution]:
    support = count_slot_support(submissions)
    return rank_time_resolutions(
        TimeResolution(slot=slot, support_count=count)
        for slot, count in support.items()
    )


class TimeConsensusResolver:
    """Ranks time slots by how many participants can attend."""

    def resolve(self, submissions: Sequence[ParticipantSubmission]) -> list[TimeResolution]:
        logger.debug("Time consensus requested | submissions=%s", len(submissions))
        ranking = resolve_time_consensus(submissions)
        if not ranking:
            logger.info(
                "Time consensus empty | submissions=%s",
                len(submissions),
            )
            return ranking

        leader = ranking[0]
        logger.info(
            "Time consensus resolved | best_slot=%s | support=%s | candidates=%s",
            leader.slot.cell_id(),
            leader.support_count,
            len(ranking),
        )
        return ranking
