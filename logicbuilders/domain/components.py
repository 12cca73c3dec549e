# logicbuilders/domain/components.py
"""
PC component categories and their per-category specification schemas.

Catalog category names are not consistent (the CPU category exists both as
"Cpu" and "CPU", storage is split into internal and external drives), so every
raw name goes through ComponentCategory.from_name before any comparison.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class ComponentCategory(str, Enum):
    CPU = "cpu"
    MOTHERBOARD = "motherboard"
    MEMORY = "memory"
    POWER_SUPPLY = "power_supply"
    INTERNAL_STORAGE = "internal_storage"
    EXTERNAL_STORAGE = "external_storage"
    VIDEO_CARD = "video_card"
    CASE = "case"
    OTHER = "other"

    @classmethod
    def from_name(cls, name: str | None) -> "ComponentCategory":
        return _CATEGORY_NAMES.get((name or "").strip().lower(), cls.OTHER)


_CATEGORY_NAMES = {
    "cpu": ComponentCategory.CPU,  # "Cpu" and "CPU" both land here
    "motherboard": ComponentCategory.MOTHERBOARD,
    "memory": ComponentCategory.MEMORY,
    "power supply": ComponentCategory.POWER_SUPPLY,
    "internal hard drive": ComponentCategory.INTERNAL_STORAGE,
    "external hard drive": ComponentCategory.EXTERNAL_STORAGE,
    "video card": ComponentCategory.VIDEO_CARD,
    "case": ComponentCategory.CASE,
}


# =====================================================
# build validation
# =====================================================

#(label reported to the customer, categories that satisfy it)
REQUIRED_CATEGORIES = (
    ("CPU", {ComponentCategory.CPU}),
    ("Motherboard", {ComponentCategory.MOTHERBOARD}),
    ("RAM", {ComponentCategory.MEMORY}),
    ("Power Supply", {ComponentCategory.POWER_SUPPLY}),
    ("Storage", {ComponentCategory.INTERNAL_STORAGE, ComponentCategory.EXTERNAL_STORAGE}),
)


@dataclass(frozen=True)
class BuildValidation:
    is_valid: bool
    missing: List[str]


def validate_build(category_names: Iterable[str]) -> BuildValidation:
    """Check that a build has at least one product in every required category."""
    present = {ComponentCategory.from_name(n) for n in category_names}
    missing = [label for label, accepted in REQUIRED_CATEGORIES if not (present & accepted)]
    return BuildValidation(is_valid=not missing, missing=missing)


# =====================================================
# specs, one schema per category
# =====================================================

class _Specs(BaseModel):
    model_config = ConfigDict(extra="forbid")


class CpuSpecs(_Specs):
    category: Literal["cpu"] = "cpu"
    socket: str
    cores: int = Field(..., gt=0)
    threads: Optional[int] = Field(None, gt=0)
    base_clock_ghz: Optional[float] = Field(None, gt=0)
    boost_clock_ghz: Optional[float] = Field(None, gt=0)


class MotherboardSpecs(_Specs):
    category: Literal["motherboard"] = "motherboard"
    socket: str
    form_factor: str
    memory_type: Optional[str] = None


class MemorySpecs(_Specs):
    category: Literal["memory"] = "memory"
    capacity_gb: int = Field(..., gt=0)
    memory_type: str
    speed_mhz: Optional[int] = Field(None, gt=0)


class PowerSupplySpecs(_Specs):
    category: Literal["power_supply"] = "power_supply"
    wattage: int = Field(..., gt=0)
    efficiency_rating: Optional[str] = None
    modular: Optional[bool] = None


class InternalStorageSpecs(_Specs):
    category: Literal["internal_storage"] = "internal_storage"
    capacity_gb: int = Field(..., gt=0)
    interface: Optional[str] = None


class ExternalStorageSpecs(_Specs):
    category: Literal["external_storage"] = "external_storage"
    capacity_gb: int = Field(..., gt=0)
    interface: Optional[str] = None


class VideoCardSpecs(_Specs):
    category: Literal["video_card"] = "video_card"
    chipset: str
    memory_gb: Optional[int] = Field(None, gt=0)


class GenericSpecs(BaseModel):
    model_config = ConfigDict(extra="allow")

    category: Literal["case", "other"] = "other"


ComponentSpecs = Annotated[
    Union[
        CpuSpecs,
        MotherboardSpecs,
        MemorySpecs,
        PowerSupplySpecs,
        InternalStorageSpecs,
        ExternalStorageSpecs,
        VideoCardSpecs,
        GenericSpecs,
    ],
    Field(discriminator="category"),
]

_specs_adapter = TypeAdapter(ComponentSpecs)


def parse_specs(category_name: str, raw: dict):
    """Validate a raw specs map against the schema of the product's category."""
    category = ComponentCategory.from_name(category_name)
    return _specs_adapter.validate_python({**raw, "category": category.value})
