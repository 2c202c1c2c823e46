"""Data models for Home Run Bot."""

from dataclasses import dataclass, field


@dataclass
class Playback:
    """One encoded variant of a feed's video."""

    name: str  # e.g. "mp4Avc"
    url: str


@dataclass
class Feed:
    """A delivery channel for a highlight's video."""

    type: str  # e.g. "CMS"
    playbacks: list[Playback] = field(default_factory=list)


@dataclass
class Highlight:
    """Represents a single matched highlight returned by the search API."""

    id: str
    description: str
    feeds: list[Feed] = field(default_factory=list)


@dataclass
class SearchResult:
    """Highlights matched by a search query, most recent first."""

    highlights: list[Highlight] = field(default_factory=list)
    total: int | None = None

    @property
    def top(self) -> Highlight | None:
        """The only highlight the watcher looks at."""
        return self.highlights[0] if self.highlights else None


@dataclass
class NotificationPayload:
    """Represents the message posted to the webhook."""

    text: str

    def to_json(self) -> dict[str, str]:
        return {"text": self.text}
