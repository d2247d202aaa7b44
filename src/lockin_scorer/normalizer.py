"""Dimension Normalizer - Phase 1 of the Scoring Engine.

Normalizes raw dimension ratings into a complete, typed DimensionSet.
Chooses the scoring schema, fills in missing dimensions and keeps values
inside the 0-100 rating scale.
"""

import math
from typing import Any, Mapping, Optional

from .app_logging import get_logger
from .config import get_config
from .exceptions import DimensionSchemaError, DimensionValueError
from .schema import DIMENSION_SCHEMAS, DimensionSet, ScoringStrategy

logger = get_logger("normalizer")

RATING_MIN = 0
RATING_MAX = 100


def round_half_up(value: float) -> int:
    """Round .5 towards positive infinity (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


class DimensionNormalizer:
    """Normalizes raw rating mappings into DimensionSet models."""

    def __init__(self, clamp_inputs: Optional[bool] = None):
        """Initialize normalizer; clamping defaults to the configured setting."""
        if clamp_inputs is None:
            clamp_inputs = get_config().normalizer.clamp_inputs
        self.clamp_inputs = clamp_inputs

    def detect_strategy(self, raw: Mapping[str, Any]) -> ScoringStrategy:
        """Determine which schema a raw mapping was written against.

        Raises:
            DimensionSchemaError: If keys from both schemas are present.
        """
        present = {
            strategy: sorted(set(raw) & set(schema.accepted_keys()))
            for strategy, schema in DIMENSION_SCHEMAS.items()
        }
        matched = [strategy for strategy, keys in present.items() if keys]

        if len(matched) > 1:
            details = "; ".join(f"{s.value}: {', '.join(present[s])}" for s in matched)
            raise DimensionSchemaError(
                f"Dimensions from more than one schema were supplied ({details})"
            )
        if matched:
            return matched[0]
        return ScoringStrategy.WEIGHTED_7

    def normalize(
        self,
        raw: Mapping[str, Any],
        strategy: Optional[ScoringStrategy] = None,
    ) -> DimensionSet:
        """Normalize a raw rating mapping into a complete DimensionSet.

        Args:
            raw: Dimension name -> rating, possibly partial
            strategy: Schema to use; detected from the keys when omitted

        Returns:
            DimensionSet with every dimension present

        Raises:
            DimensionSchemaError: Mixed schemas, or keys that contradict
                the requested strategy
            DimensionValueError: A value that is not a finite number
        """
        detected = self.detect_strategy(raw)
        if strategy is None:
            strategy = detected
        elif raw and detected != strategy and self._has_schema_keys(raw, detected):
            raise DimensionSchemaError(
                f"Dimensions for the {detected.value} schema were supplied "
                f"to the {strategy.value} strategy"
            )

        schema = DIMENSION_SCHEMAS[strategy]
        accepted = schema.accepted_keys()

        values: dict[str, int] = {}
        for key, value in raw.items():
            if key not in accepted:
                logger.debug("Ignoring unknown dimension '%s'", key)
                continue
            wire_name = accepted[key]
            values[wire_name] = self._normalize_value(wire_name, value)

        return schema.model_validate(values)

    @staticmethod
    def _has_schema_keys(raw: Mapping[str, Any], strategy: ScoringStrategy) -> bool:
        return bool(set(raw) & set(DIMENSION_SCHEMAS[strategy].accepted_keys()))

    def _normalize_value(self, name: str, value: Any) -> int:
        """Coerce one rating to an integer on the 0-100 scale."""
        if value is None:
            return 0
        # bool is an int subclass; True is not a rating
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DimensionValueError(name, value)
        if isinstance(value, float):
            if not math.isfinite(value):
                raise DimensionValueError(name, value)
            value = round_half_up(value)

        if self.clamp_inputs and not RATING_MIN <= value <= RATING_MAX:
            clamped = max(RATING_MIN, min(RATING_MAX, value))
            logger.warning("Dimension '%s' value %s is outside 0-100; clamped to %s", name, value, clamped)
            return clamped
        return value
