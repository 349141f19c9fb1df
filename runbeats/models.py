"""Pydantic models for RunBeats domain objects."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

Mapping = Literal["half", "normal", "double"]
SectionType = Literal["warmup", "main", "cooldown"]
DistanceUnit = Literal["km", "mi"]


class PaceInput(BaseModel):
    """Running pace per kilometre or mile."""

    model_config = ConfigDict(frozen=True)

    minutes: int = Field(ge=0)
    seconds: int = Field(default=0, ge=0, lt=60)
    unit: DistanceUnit = "km"

    @model_validator(mode="after")
    def _not_zero(self) -> "PaceInput":
        if self.minutes == 0 and self.seconds == 0:
            raise ValueError("pace must be greater than 0:00")
        return self


class Artist(BaseModel):
    id: str
    name: str


class RawTrack(BaseModel):
    """A track as returned by the catalog, before tempo analysis."""

    id: str
    name: str
    artists: list[Artist] = Field(min_length=1)
    preview_url: str | None = None
    duration_ms: int = Field(gt=0)
    popularity: int | None = Field(default=None, ge=0, le=100)

    @classmethod
    def from_spotify(cls, item: dict[str, Any]) -> "RawTrack":
        return cls(
            id=item["id"],
            name=item["name"],
            artists=[Artist(id=a["id"], name=a["name"]) for a in item.get("artists", [])],
            preview_url=item.get("preview_url"),
            duration_ms=item["duration_ms"],
            popularity=item.get("popularity"),
        )

    @property
    def artist_names(self) -> str:
        return ", ".join(a.name for a in self.artists)


class TempoMapping(BaseModel):
    model_config = ConfigDict(frozen=True)

    mapped_bpm: float
    mapping: Mapping
    error: float  # absolute BPM distance from the target cadence


class TrackData(BaseModel):
    """A catalog track annotated with its estimated and mapped tempo."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    artist: str  # joined artist names
    preview_url: str | None = None
    original_tempo: float = Field(gt=0)
    mapped_bpm: float
    mapping: Mapping
    confidence: float
    duration_ms: int
    popularity: int | None = None

    @property
    def display_name(self) -> str:
        if self.artist and self.name:
            return f"{self.artist} - {self.name}"
        return self.name or "Unknown"


class SectionTargets(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Warm-up and cool-down follow the cadence formulas even for tiny cadences
    warmup: float
    main: float = Field(gt=0)
    cooldown: float

    def for_section(self, section_type: SectionType) -> float:
        return getattr(self, section_type)


class PlaylistSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: SectionType
    target_bpm: float
    tracks: tuple[TrackData, ...] = ()


class Playlist(BaseModel):
    model_config = ConfigDict(frozen=True)

    sections: tuple[PlaylistSection, ...] = ()

    @computed_field
    @property
    def total_tracks(self) -> int:
        return sum(len(section.tracks) for section in self.sections)

    def all_tracks(self) -> list[TrackData]:
        return [track for section in self.sections for track in section.tracks]


class AnalysisSection(BaseModel):
    """One section of a catalog audio analysis."""

    start: float = 0.0
    duration: float = 0.0
    confidence: float = 0.0
    tempo: float = 0.0
    tempo_confidence: float = 0.0


class Recommendation(BaseModel):
    """Result of one playlist request, ready to render or serialize."""

    playlist: Playlist
    cadence: int
    section_targets: SectionTargets
    genres: list[str] = []
    pace: PaceInput | None = None
