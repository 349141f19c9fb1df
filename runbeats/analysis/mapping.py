"""Half/normal/double tempo mapping against a target cadence."""

from runbeats.models import Mapping, TempoMapping

MULTIPLIERS: list[tuple[float, Mapping]] = [
    (0.5, "half"),
    (1.0, "normal"),
    (2.0, "double"),
]

# A multiplier only replaces the unmapped tempo within this error, in percent of the cadence
MAX_MAPPING_ERROR_PCT = 3.0


def find_best_tempo_mapping(original_tempo: float, target_cadence: float) -> TempoMapping:
    """Find the multiplier that brings a tempo closest to the cadence.

    The unmapped tempo is the fallback. A multiplier wins only if it lands
    within 3% of the cadence and is strictly closer than the current best,
    so ties keep the earlier entry of (half, normal, double).
    """
    best = TempoMapping(
        mapped_bpm=original_tempo,
        mapping="normal",
        error=abs(original_tempo - target_cadence),
    )

    for multiplier, mapping in MULTIPLIERS:
        mapped = original_tempo * multiplier
        error = abs(mapped - target_cadence)
        error_pct = error / target_cadence * 100

        if error_pct <= MAX_MAPPING_ERROR_PCT and error < best.error:
            best = TempoMapping(mapped_bpm=mapped, mapping=mapping, error=error)

    return best


def mapping_label(mapping: Mapping) -> str:
    """Short multiplier label for display, e.g. '0.5×'."""
    return {"half": "0.5×", "double": "2×"}.get(mapping, "1×")
