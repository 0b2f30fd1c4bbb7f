# reducer.py
# Turns a path into an ordered instruction sequence.
# Walks from the destination back to the origin, classifying every span and
# folding spans that describe the same manoeuvre into one instruction.

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .catalog import InstructionKind
from .classifier import classify
from .instruction import NavigationInstruction
from .models import Path, PointLike, PointOfInterest
from .nav_config import NavConfig
from .sequence import InstructionSequence

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def classify_path(path: Path, config: Optional[NavConfig] = None) -> List[NavigationInstruction]:
    """
    Unmerged instructions, one per segment, ordered destination → origin.

    The last segment always ends with the destination hint. When a turn or
    stairs starts at its first key point, that manoeuvre keeps the transition
    window at the start of the segment and the destination hint covers the
    rest, so this segment yields two candidates.

    Args:
        path:   Path without degenerate segments.
        config: NavConfig with the thresholds.

    Returns:
        Candidates, each carrying the distance left at the start of its span.
    """
    config = config or NavConfig()
    points = path.points
    lengths = path.segment_lengths
    last = len(points) - 1

    distance_left = lengths[-1]
    candidates = [classify(points[last - 1], points[last], None, distance_left, config)]
    if last >= 2:
        manoeuvre = classify(points[last - 2], points[last - 1], points[last], distance_left, config)
        if not manoeuvre.kind.is_straight:
            window = config.actual_transition_distance(distance_left)
            rest = distance_left - window
            candidates = [
                replace(
                    candidates[0],
                    kind=InstructionKind.destination_for(rest, config),
                    distance_left=rest,
                    distance_span=rest,
                ),
                replace(manoeuvre, distance_span=window),
            ]

    for i in range(last - 2, -1, -1):
        distance_left += lengths[i]
        previous = points[i - 1] if i > 0 else None
        candidates.append(classify(previous, points[i], points[i + 1], distance_left, config))
    return candidates


# ---------------------------------------------------------------------------
# Merging
# ---------------------------------------------------------------------------

def should_merge(
    kept: NavigationInstruction,
    candidate: NavigationInstruction,
    config: Optional[NavConfig] = None,
) -> bool:
    """
    Whether the earlier candidate folds into the later, already kept instruction.

    Args:
        kept:      Instruction closer to the destination.
        candidate: Instruction right before it on the path.
    """
    config = config or NavConfig()

    # Going straight.
    if kept.kind.is_straight and candidate.kind.is_straight:
        return True

    # Too short to be worth showing on its own.
    if candidate.kind.is_straight and candidate.distance_span < config.transition_distance_m:
        return True

    # Going straight to the destination.
    if kept.kind.is_destination and candidate.kind.is_destination:
        return True

    # Identical text.
    # TODO Merging turns into backturns requires directions; join with classify().
    return kept.kind is candidate.kind and kept.door_count == candidate.door_count


def reduce_instructions(
    candidates: Iterable[NavigationInstruction],
    config: Optional[NavConfig] = None,
) -> Tuple[NavigationInstruction, ...]:
    """
    Fold destination → origin candidates into the final instruction list.

    Args:
        candidates: Output of classify_path().
        config:     NavConfig with the thresholds.

    Returns:
        Instructions ordered origin → destination.
    """
    config = config or NavConfig()
    kept: List[NavigationInstruction] = []
    for candidate in candidates:
        if kept and should_merge(kept[-1], candidate, config):
            kept[-1] = kept[-1].absorb(candidate, config)
        else:
            kept.append(candidate)
    kept.reverse()
    return tuple(kept)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build(
    path: Union[Path, Sequence[PointLike]],
    points_of_interest: Optional[Iterable[PointOfInterest]] = None,
    config: Optional[NavConfig] = None,
) -> InstructionSequence:
    """
    Navigation instructions which one meets on the way along the path.

    Args:
        path:               Path from origin to destination.
        points_of_interest: E.g. doors; kept on the sequence, not classified yet.
        config:             NavConfig instance.

    Returns:
        A new InstructionSequence.

    Raises:
        InvalidPathError: If the path has fewer than 2 points.
    """
    config = config or NavConfig()
    if not isinstance(path, Path):
        path = Path(path)

    simplified = path.without_degenerate_segments(config.degenerate_segment_epsilon_m)
    collapsed = len(path) - len(simplified)
    if collapsed:
        logger.debug(f"Collapsed {collapsed} degenerate segment(s) of the path.")

    instructions = reduce_instructions(classify_path(simplified, config), config)
    sequence = InstructionSequence(instructions, simplified, points_of_interest, config)
    logger.info(
        f"Built {len(sequence)} instructions from {len(path)} key points "
        f"({sequence.total_length:.2f} m)."
    )
    return sequence
