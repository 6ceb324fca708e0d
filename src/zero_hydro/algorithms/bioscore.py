"""
Bio-score calculation module.

Combines the species sub-scores with a weighted geometric mean,

    score = 100 * prod(subscore_i ^ weight_i) * oxygen_factor(DO)

so that one poor factor suppresses the whole score. Species with a hard
temperature ceiling score 0 above it before any curve is evaluated.
"""

import logging
import math
from typing import Dict, Iterable, Optional, Tuple

from ..core import constants
from ..models import Species
from .illumination import IlluminationCalculator
from .oxygen import OxygenModel
from .species import BioContext, SPECIES_CURVES, SpeciesCurve


class BioScoreCalculator:
    """
    Per-species activity scores for one resolved environment.

    raw_scores() keeps full float precision for downstream smoothing;
    scores() returns the integer scores and the best of them.
    """

    def __init__(
        self,
        illumination_calc: Optional[IlluminationCalculator] = None,
        curves: Optional[Dict[Species, SpeciesCurve]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize bio-score calculator.

        Args:
            illumination_calc: Illumination calculator (default timezone if None)
            curves: Species calibration table
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.illumination_calc = illumination_calc or IlluminationCalculator(logger=self.logger)
        self.curves = curves or SPECIES_CURVES

    def resolve_illumination(self, ctx: BioContext) -> float:
        """Get the context illumination, deriving it from time and clouds if absent."""
        if ctx.illumination is not None:
            return ctx.illumination
        return self.illumination_calc.illumination(ctx.timestamp, ctx.cloud_cover)

    def species_score(self, species: Species, ctx: BioContext, lux: float) -> float:
        """
        Calculate the unrounded score of one species.

        Args:
            species: Target species
            ctx: Resolved environment
            lux: Illumination index

        Returns:
            Score in [0, 100]
        """
        curve = self.curves[species]
        if curve.is_vetoed(ctx):
            return 0.0

        score = 100.0
        for subscore in curve.subscores:
            value = min(1.0, max(0.0, subscore.curve(ctx, lux)))
            score *= value ** subscore.weight

        score *= OxygenModel.oxygen_factor(ctx.dissolved_oxygen)
        return min(100.0, max(0.0, score))

    def vetoed(self, ctx: BioContext, species: Iterable[Species]) -> Tuple[Species, ...]:
        """Get the species whose hard ceiling is exceeded in this context."""
        return tuple(s for s in species if self.curves[s].is_vetoed(ctx))

    def raw_scores(
        self,
        ctx: BioContext,
        species: Iterable[Species] = tuple(Species)
    ) -> Dict[Species, float]:
        """
        Calculate unrounded scores for several species.

        Args:
            ctx: Resolved environment
            species: Species to score

        Returns:
            Mapping species -> score in [0, 100]
        """
        lux = self.resolve_illumination(ctx)
        return {s: self.species_score(s, ctx, lux) for s in species}

    def scores(
        self,
        ctx: BioContext,
        species: Iterable[Species] = tuple(Species)
    ) -> Tuple[Dict[Species, int], int]:
        """
        Calculate integer scores and the best-of-species score.

        Args:
            ctx: Resolved environment
            species: Species to score

        Returns:
            Tuple of (scores, best_score)
        """
        rounded = {s: round_score(v) for s, v in self.raw_scores(ctx, species).items()}
        best = max(rounded.values()) if rounded else 0

        self.logger.debug(
            f"Bio-scores at {ctx.timestamp}: "
            + ", ".join(f"{s.value}={v}" for s, v in rounded.items())
        )
        return rounded, best


def round_score(score: float) -> int:
    """Round a score half up to an integer in [0, 100]."""
    return int(min(100, max(0, math.floor(score + 0.5))))


def smooth_scores(
    previous: Optional[Dict[Species, float]],
    raw: Dict[Species, float],
    alpha: float = constants.EMA_ALPHA,
    vetoed: Iterable[Species] = ()
) -> Dict[Species, float]:
    """
    Apply one exponential moving average step to a score vector.

    Vetoed species are forced to 0 instead of being blended, so a hard
    ceiling is never softened by earlier scores.

    Args:
        previous: Previous smoothed scores (None seeds with raw)
        raw: Current raw scores
        alpha: Smoothing factor
        vetoed: Species whose smoothed score must be 0 this step

    Returns:
        New smoothed scores
    """
    vetoed = set(vetoed)
    smoothed = {}
    for species, value in raw.items():
        if species in vetoed:
            smoothed[species] = 0.0
        elif previous is None:
            smoothed[species] = value
        else:
            last = previous.get(species, value)
            smoothed[species] = last + alpha * (value - last)
    return smoothed
