"""
Location data models.

Contains DTOs for user-configured fishing locations.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .profile import WaterBodyProfile, BasinType, DepthCategory, LandUse, Species


@dataclass(frozen=True)
class Location:
    """A simulated location and the profile of its water body."""

    id: str
    name: str
    latitude: float
    longitude: float
    profile: WaterBodyProfile

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Location":
        """
        Build a location from its configuration dictionary.

        Args:
            data: Dictionary with id, name, latitude, longitude and a
                  "profile" sub-dictionary

        Returns:
            Location instance
        """
        profile_data = dict(data.get("profile", {}))
        if "basin" not in profile_data:
            raise ValueError(f"Location {data.get('id')} has no profile.basin")

        kwargs: Dict[str, Any] = {"basin": BasinType(profile_data["basin"])}
        if "depth_category" in profile_data:
            kwargs["depth_category"] = DepthCategory(profile_data["depth_category"])
        if "land_use" in profile_data:
            kwargs["land_use"] = LandUse(profile_data["land_use"])
        for key in ("mean_depth", "surface_area", "shape_factor"):
            if profile_data.get(key) is not None:
                kwargs[key] = float(profile_data[key])
        if profile_data.get("target_species"):
            kwargs["target_species"] = tuple(
                Species(name) for name in profile_data["target_species"]
            )

        return cls(
            id=str(data["id"]),
            name=data.get("name", str(data["id"])),
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            profile=WaterBodyProfile(**kwargs),
        )
