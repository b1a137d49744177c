"""Data models for the content studio.

Content records are plain dataclasses; they are serialized with `to_dict`
for JSON export and rendered with `to_markdown` for drafts on disk.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class ContentType(str, Enum):
    """Kinds of media the studio produces."""

    BLOG = "blog"
    SERMON = "sermon"
    PODCAST = "podcast"
    SERIES = "series"
    DEVOTIONAL = "devotional"
    EBOOKS = "ebooks"
    COURSES = "courses"
    VIDEOS = "videos"
    LYRICS = "lyrics"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    ContentType.BLOG: "Blog Post",
    ContentType.SERMON: "Sermon",
    ContentType.PODCAST: "Podcast Episode",
    ContentType.SERIES: "Series",
    ContentType.DEVOTIONAL: "Devotional",
    ContentType.EBOOKS: "E-book",
    ContentType.COURSES: "Course",
    ContentType.VIDEOS: "Video Script",
    ContentType.LYRICS: "Lyrics",
}


@dataclass
class ContentIdea:
    """A brainstormed idea (title + short description)."""

    title: str
    description: str

    def __str__(self) -> str:
        return f"**{self.title}**: {self.description}"


@dataclass
class BookRecommendation:
    title: str
    author: str

    def __str__(self) -> str:
        return f"*{self.title}* by {self.author}"


@dataclass
class ContentDraft:
    """Generated content for one idea."""

    content_type: ContentType
    title: str
    body: str
    generated_at: datetime = field(default_factory=datetime.now)
    recommended_books: list[BookRecommendation] = field(default_factory=list)

    @property
    def word_count(self) -> int:
        return len(self.body.split())

    def to_markdown(self) -> str:
        """Render the draft as a markdown document."""
        md = f"# {self.title}\n\n"
        md += f"**Type**: {self.content_type.label}\n"
        md += f"**Generated**: {self.generated_at.strftime('%Y-%m-%d %H:%M:%S')}\n\n"
        md += "---\n\n"
        md += f"{self.body.strip()}\n"

        if self.recommended_books:
            md += "\n## Further Reading\n\n"
            for book in self.recommended_books:
                md += f"- {book}\n"

        md += "\n---\n\n"
        md += f"**Words**: {self.word_count:,}\n"
        return md

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON export."""
        return {
            "content_type": self.content_type.value,
            "title": self.title,
            "body": self.body,
            "word_count": self.word_count,
            "generated_at": self.generated_at.isoformat(),
            "recommended_books": [
                {"title": b.title, "author": b.author} for b in self.recommended_books
            ],
        }


class EditorAction(str, Enum):
    """One-shot rewrites applied to a working draft."""

    OUTLINE = "outline"
    WRITE_FULL = "write-full"
    COPY_EDIT = "copy-edit"
    IMPROVE = "improve"
    SUMMARIZE = "summarize"
    TRANSLATE_AMHARIC = "translate-amharic"
    IMAGE_PROMPT = "image-prompt"


class CoachingFocus(str, Enum):
    """Aspects of a sermon the coach can review."""

    THEOLOGY = "theology"
    CLARITY = "clarity"
    ENGAGEMENT = "engagement"
    DELIVERY = "delivery"

    @property
    def label(self) -> str:
        return _COACHING_LABELS[self]


_COACHING_LABELS = {
    CoachingFocus.THEOLOGY: "Theological Accuracy Review",
    CoachingFocus.CLARITY: "Clarity & Flow Analysis",
    CoachingFocus.ENGAGEMENT: "Audience Engagement Suggestions",
    CoachingFocus.DELIVERY: "Delivery & Presentation Tips",
}


class ExpansionForm(str, Enum):
    """Long-form pieces that can be written from an exegesis."""

    COMMENTARY = "commentary"
    HOMILY = "homily"
    ESSAY = "essay"


@dataclass
class HomilyIdea:
    title: str
    fathers: str

    def __str__(self) -> str:
        return f"**{self.title}** ({self.fathers})"


@dataclass
class Exegesis:
    """Patristic reading of a passage, with homily titles it suggests."""

    passage: str
    commentary: str
    homily_ideas: list[HomilyIdea] = field(default_factory=list)

    def to_markdown(self) -> str:
        md = f"# Exegesis: {self.passage}\n\n{self.commentary.strip()}\n"
        if self.homily_ideas:
            md += "\n## Homily Ideas\n\n"
            for idea in self.homily_ideas:
                md += f"- {idea}\n"
        return md


@dataclass
class DaySuggestion:
    """Liturgical context for a date plus a post idea for it."""

    day: date
    liturgical_info: str
    post_title: str
    post_content: str
    recommended_titles: list[str] = field(default_factory=list)

    def to_markdown(self) -> str:
        md = f"# {self.day:%B} {self.day.day}, {self.day:%Y}\n\n{self.liturgical_info.strip()}\n\n"
        md += f"## Suggested Post: {self.post_title}\n\n{self.post_content.strip()}\n"
        if self.recommended_titles:
            md += "\n## Related Projects\n\n"
            md += "".join(f"- {t}\n" for t in self.recommended_titles)
        return md


__all__ = [
    "BookRecommendation",
    "CoachingFocus",
    "ContentDraft",
    "ContentIdea",
    "ContentType",
    "DaySuggestion",
    "EditorAction",
    "Exegesis",
    "ExpansionForm",
    "HomilyIdea",
]
