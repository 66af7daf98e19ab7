"""Flat unit configuration objects, as handed over by hosts (camelCase or snake_case keys)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from layout_units.engine.enums import (
    POSITION_AXES,
    SIZE_DIMENSIONS,
    Dimension,
    PositionUnit,
    ScaleUnit,
    SizeUnit,
    UnitType,
)


class UnitConfig(BaseModel):
    """Fields shared by every unit kind."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str = ""  # Defaults to id
    # Literal number, or a behaviour / strategy id string; None = derive from the unit basis
    base_value: float | str | None = Field(default=None, alias="baseValue")
    offset: float = 0.0
    alignment: str | None = None

    @model_validator(mode="after")
    def default_name(self):
        if not self.name:
            self.name = self.id
        return self


class SizeUnitConfig(UnitConfig):
    unit_type: UnitType = Field(default=UnitType.SIZE, alias="unitType")
    size_unit: SizeUnit = Field(alias="sizeUnit")
    dimension: Dimension = Dimension.WIDTH
    maintain_aspect_ratio: bool = Field(default=False, alias="maintainAspectRatio")
    min_size: float | None = Field(default=None, alias="minSize")
    max_size: float | None = Field(default=None, alias="maxSize")

    @model_validator(mode="after")
    def check_size_bounds(self):
        if self.dimension not in SIZE_DIMENSIONS:
            raise ValueError(f"size dimension must be width, height or both, got {self.dimension.value}")
        if self.min_size is not None and self.max_size is not None and self.min_size > self.max_size:
            raise ValueError(f"minSize {self.min_size} is greater than maxSize {self.max_size}")
        return self


class PositionUnitConfig(UnitConfig):
    unit_type: UnitType = Field(default=UnitType.POSITION, alias="unitType")
    position_unit: PositionUnit = Field(alias="positionUnit")
    axis: Dimension = Dimension.X

    @model_validator(mode="after")
    def check_axis(self):
        if self.axis not in POSITION_AXES:
            raise ValueError(f"position axis must be x, y or xy, got {self.axis.value}")
        return self


class ScaleUnitConfig(UnitConfig):
    unit_type: UnitType = Field(default=UnitType.SCALE, alias="unitType")
    scale_unit: ScaleUnit = Field(alias="scaleUnit")
    maintain_aspect_ratio: bool = Field(default=False, alias="maintainAspectRatio")
    min_scale: float | None = Field(default=None, alias="minScale")
    max_scale: float | None = Field(default=None, alias="maxScale")
    uniform_scaling: bool = Field(default=False, alias="uniformScaling")

    @model_validator(mode="after")
    def check_scale_bounds(self):
        if self.min_scale is not None and self.max_scale is not None and self.min_scale > self.max_scale:
            raise ValueError(f"minScale {self.min_scale} is greater than maxScale {self.max_scale}")
        return self


CONFIG_MODELS: dict[UnitType, type[UnitConfig]] = {
    UnitType.SIZE: SizeUnitConfig,
    UnitType.POSITION: PositionUnitConfig,
    UnitType.SCALE: ScaleUnitConfig,
}

# Key that marks a flat mapping as a given unit kind (either spelling)
UNIT_KEYS: dict[UnitType, tuple[str, str]] = {
    UnitType.SIZE: ("sizeUnit", "size_unit"),
    UnitType.POSITION: ("positionUnit", "position_unit"),
    UnitType.SCALE: ("scaleUnit", "scale_unit"),
}
