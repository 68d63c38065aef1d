# acuatlas/models.py
"""
Data model
==========
Point / meridian shapes shared by the catalog, the gateways and the view
controller. Catalog points are frozen; AI suggestions arrive as
`SuggestedPoint` (every field optional) and are turned into full `Point`
objects by `gateway.normalize_suggestion`.
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MeridianCode(str, Enum):
    LU = "LU"  # Pulmón
    LI = "LI"  # Intestino Grueso
    ST = "ST"  # Estómago
    SP = "SP"  # Bazo
    HT = "HT"  # Corazón
    SI = "SI"  # Intestino Delgado
    BL = "BL"  # Vejiga
    KI = "KI"  # Riñón
    PC = "PC"  # Pericardio
    SJ = "SJ"  # San Jiao
    GB = "GB"  # Vesícula Biliar
    LR = "LR"  # Hígado
    GV = "GV"  # Du Mai
    CV = "CV"  # Ren Mai


class MeridianDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: MeridianCode
    name: str
    color: str


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    pinyin: str = ""
    meridian: str
    meridian_name: str
    location: str
    indications: tuple[str, ...] = Field(default_factory=tuple)
    contraindications: tuple[str, ...] = Field(default_factory=tuple)
    applications: str
    benefits: str  # acciones y beneficios energéticos
    techniques: str
    observations: str
    category: str | None = None
    static_image: str | None = None


class SuggestedPoint(BaseModel):
    """One entry of `suggestedPoints` as the text model returns it."""
    model_config = {"extra": "ignore"}

    id: str | None = None
    name: str | None = None
    pinyin: str | None = None
    location: str | None = None
    indications: list[str] | None = None
    contraindications: list[str] | None = None
    applications: str | None = None
    benefits: str | None = None
    techniques: str | None = None
    observations: str | None = None


class SuggestionReply(BaseModel):
    model_config = {"extra": "ignore", "populate_by_name": True}

    explanation: str
    suggested_points: list[SuggestedPoint] = Field(alias="suggestedPoints")


class SearchOutcome(BaseModel):
    explanation: str | None = None
    points: list[Point] = Field(default_factory=list)
