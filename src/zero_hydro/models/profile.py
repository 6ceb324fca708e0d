"""
Water body profile models.

Contains the morphology description of a simulated body of water.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..core import constants


class BasinType(str, Enum):
    """Basin category of a water body."""

    RIVER = "river"
    POND = "pond"
    MEDIUM_CHANNEL = "medium_channel"
    DEEP_LAKE = "deep_lake"


class DepthCategory(str, Enum):
    """Coarse depth category, each with a valid range and a nominal depth."""

    SHALLOW = "shallow"
    MEDIUM = "medium"
    DEEP = "deep"

    @property
    def nominal_depth(self) -> float:
        """Depth (m) used when no numeric mean depth is known."""
        return {"shallow": 2.0, "medium": 6.0, "deep": 15.0}[self.value]

    @property
    def depth_range(self) -> Tuple[float, float]:
        """Inclusive (min, max) mean depth range in meters."""
        return {
            "shallow": (0.0, 3.0),
            "medium": (3.0, 15.0),
            "deep": (15.0, float("inf")),
        }[self.value]


class LandUse(str, Enum):
    """Dominant land use of the catchment."""

    URBAN = "urban"
    AGRICULTURAL = "agricultural"
    GRASSLAND = "grassland"
    FORESTED = "forested"


class Species(str, Enum):
    """Target fish species."""

    ZANDER = "zander"
    PIKE = "pike"
    PERCH = "perch"
    BLACK_BASS = "black_bass"


@dataclass(frozen=True)
class WaterBodyProfile:
    """Morphology of a water body ("profile")."""

    basin: BasinType
    depth_category: DepthCategory = DepthCategory.MEDIUM
    land_use: LandUse = LandUse.FORESTED
    mean_depth: Optional[float] = None  # m, preferred over depth_category
    surface_area: float = constants.DEFAULT_SURFACE_AREA  # m²
    shape_factor: float = constants.DEFAULT_SHAPE_FACTOR  # >= 1, fetch elongation
    target_species: Tuple[Species, ...] = tuple(Species)

    @property
    def effective_depth(self) -> float:
        """Mean depth (m) used by the thermal model."""
        if self.mean_depth is not None:
            return self.mean_depth
        return self.depth_category.nominal_depth

    @property
    def is_flowing(self) -> bool:
        """Whether the basin has fast turnover (river)."""
        return self.basin == BasinType.RIVER
