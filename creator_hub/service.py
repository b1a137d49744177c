"""Content Studio - shared orchestration for AI-assisted content creation.

Brainstorm → Draft → (Further reading) → (Podcast script) → (Narration)

Editor actions, scripture study, sermon coaching and suggestions are single
text-generation calls built from templates in `creator_hub.prompts`.

The studio does not build its own client: a `GeminiClient` is passed in,
which keeps the CLI thin and lets tests inject a fake transport.
Errors from the client propagate unchanged so callers can report the
specific failure (blocked content, throttling, malformed output, ...).
"""

import logging
from datetime import date
from pathlib import Path

from core.errors import MalformedResponseError
from core.gemini import GeminiClient
from core.models import GeneratedImage, SpeechAudio
from creator_hub import prompts
from creator_hub.models import (
    BookRecommendation,
    CoachingFocus,
    ContentDraft,
    ContentIdea,
    ContentType,
    DaySuggestion,
    EditorAction,
    Exegesis,
    ExpansionForm,
    HomilyIdea,
)

logger = logging.getLogger(__name__)

IMAGE_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
    ".gif": "image/gif",
    ".heic": "image/heic",
}

ASPECT_RATIOS = ("1:1", "3:4", "4:3", "9:16", "16:9")


def guess_image_mime_type(path: Path) -> str:
    """Map an image file extension to its MIME type."""
    try:
        return IMAGE_MIME_TYPES[path.suffix.lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported image type '{path.suffix}'. Supported: {', '.join(IMAGE_MIME_TYPES)}"
        ) from None


def _require_list(payload: object, key: str, what: str) -> list[dict]:
    """Pull `key` out of a structured-output payload, checking its shape."""
    items = payload.get(key) if isinstance(payload, dict) else None
    if not isinstance(items, list):
        raise MalformedResponseError(f"The AI returned an unexpected format for {what}.")
    return [item for item in items if isinstance(item, dict)]


class ContentStudio:
    """High-level content workflows on top of a `GeminiClient`."""

    def __init__(self, client: GeminiClient):
        self.client = client

    async def brainstorm_ideas(self, topic: str) -> list[ContentIdea]:
        """Brainstorm content ideas for a keyword or theme."""
        logger.info(f"Brainstorming ideas for: {topic}")
        result = await self.client.generate_text(
            prompts.build_ideas_prompt(topic), response_schema=prompts.IDEAS_SCHEMA
        )
        ideas = [
            ContentIdea(title=str(item.get("title", "")), description=str(item.get("description", "")))
            for item in _require_list(result, "ideas", "content ideas")
        ]
        logger.info(f"Received {len(ideas)} ideas")
        return ideas

    async def draft_content(
        self,
        content_type: ContentType,
        idea: ContentIdea,
        include_books: bool = False,
    ) -> ContentDraft:
        """Write a full draft of `content_type` for `idea`."""
        logger.info(f"Drafting {content_type.label.lower()}: {idea.title}")
        body = await self.client.generate_text(
            prompts.build_draft_prompt(content_type, idea.title, idea.description)
        )
        draft = ContentDraft(content_type=content_type, title=idea.title, body=body)

        if include_books:
            draft.recommended_books = await self.recommend_books(f"{idea.title}\n\n{body}")
        return draft

    async def refine_podcast_script(self, draft: ContentDraft) -> ContentDraft:
        """Turn a podcast outline into a production script."""
        if draft.content_type is not ContentType.PODCAST:
            raise ValueError(f"Only podcast drafts can be refined, got '{draft.content_type.value}'")
        script = await self.client.generate_text(prompts.build_podcast_script_prompt(draft.body))
        return ContentDraft(
            content_type=ContentType.PODCAST,
            title=f"{draft.title} (Production Script)",
            body=script,
            recommended_books=list(draft.recommended_books),
        )

    async def recommend_books(self, topic_or_content: str) -> list[BookRecommendation]:
        """Recommend further reading for a topic or a piece of content."""
        result = await self.client.generate_text(
            prompts.build_books_prompt(topic_or_content), response_schema=prompts.BOOKS_SCHEMA
        )
        books = [
            BookRecommendation(title=str(item.get("title", "")), author=str(item.get("author", "")))
            for item in _require_list(result, "books", "book recommendations")
        ]
        logger.debug(f"Received {len(books)} book recommendations")
        return books

    async def analyze_artwork(self, image: bytes, mime_type: str) -> str:
        """Iconographic and theological analysis of an image."""
        logger.info(f"Analyzing artwork ({mime_type}, {len(image):,} bytes)")
        return await self.client.analyze_image(prompts.ARTWORK_ANALYSIS_PROMPT, image, mime_type)

    async def generate_artwork(
        self, prompt: str, aspect_ratio: str = "1:1", variations: int = 1
    ) -> list[GeneratedImage]:
        """Generate `variations` images, one request after the other."""
        if aspect_ratio not in ASPECT_RATIOS:
            raise ValueError(f"Unsupported aspect ratio '{aspect_ratio}'")
        if variations < 1:
            raise ValueError("variations must be at least 1")

        images = []
        for i in range(variations):
            logger.info(f"Generating image {i + 1}/{variations} ({aspect_ratio})")
            images.append(await self.client.generate_image(prompt, aspect_ratio))
        return images

    async def narrate(self, text: str, voice_name: str | None = None) -> SpeechAudio:
        """Synthesize narration for `text`."""
        if not text.strip():
            raise ValueError("Nothing to narrate: text is empty")
        return await self.client.synthesize_speech(text, voice_name)

    # ------------------------------------------------------------------
    # Editor actions
    # ------------------------------------------------------------------

    async def patristic_insight(self, text: str) -> str:
        """Short commentary on a passage from the Church Fathers' perspective."""
        if not text.strip():
            raise ValueError("Nothing to comment on: text is empty")
        return await self.client.generate_text(prompts.build_patristic_insight_prompt(text))

    async def apply_editor_action(
        self, action: EditorAction, content_type: ContentType, title: str, content: str = ""
    ) -> str:
        """Run one editor action and return the rewritten text.

        `outline` works from the title alone; every other action needs content.
        """
        if action is not EditorAction.OUTLINE and not content.strip():
            raise ValueError(f"'{action.value}' needs existing content to work on")
        prompt = prompts.build_editor_prompt(action, content_type, title, content)
        logger.info(f"Running '{action.value}' on {content_type.label.lower()}: {title}")
        return await self.client.generate_text(prompt)

    async def write_section(
        self, content_type: ContentType, title: str, outline: str, section_title: str
    ) -> str:
        """Write a single chapter, lesson or series part from its outline."""
        prompt = prompts.build_section_prompt(content_type, title, outline, section_title)
        logger.info(f"Writing section '{section_title}' of {title}")
        return await self.client.generate_text(prompt)

    # ------------------------------------------------------------------
    # Scripture study and coaching
    # ------------------------------------------------------------------

    async def exegete(self, passage: str) -> Exegesis:
        """Patristic exegesis of a passage plus homily titles it suggests."""
        logger.info(f"Generating exegesis for: {passage}")
        result = await self.client.generate_text(
            prompts.build_exegesis_prompt(passage), response_schema=prompts.EXEGESIS_SCHEMA
        )
        commentary = result.get("exegesis") if isinstance(result, dict) else None
        if not isinstance(commentary, str):
            raise MalformedResponseError("The AI returned an unexpected format for the exegesis.")
        ideas = [
            HomilyIdea(title=str(item.get("title", "")), fathers=str(item.get("fathers", "")))
            for item in _require_list(result, "homilyIdeas", "homily ideas")
        ]
        return Exegesis(passage=passage, commentary=commentary, homily_ideas=ideas)

    async def expand_exegesis(
        self, exegesis: Exegesis, form: ExpansionForm, title: str = ""
    ) -> str:
        """Write a commentary, homily or essay that builds on an exegesis."""
        logger.info(f"Expanding exegesis of {exegesis.passage} into a {form.value}")
        return await self.client.generate_text(
            prompts.build_expansion_prompt(form, exegesis.passage, exegesis.commentary, title)
        )

    async def coach_sermon(self, title: str, content: str, focus: CoachingFocus) -> str:
        """Feedback on one aspect of a sermon."""
        if not content.strip():
            raise ValueError("Nothing to review: sermon content is empty")
        logger.info(f"{focus.label}: {title}")
        return await self.client.generate_text(prompts.build_coaching_prompt(focus, title, content))

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------

    async def suggest_titles(self, content_type: ContentType, topic: str) -> list[str]:
        """Candidate titles of a given content type for a theme."""
        result = await self.client.generate_text(
            prompts.build_titles_prompt(content_type, topic), response_schema=prompts.TITLES_SCHEMA
        )
        titles = result.get("titles") if isinstance(result, dict) else None
        if not isinstance(titles, list):
            raise MalformedResponseError("The AI returned an unexpected format for title ideas.")
        return [str(t) for t in titles if str(t).strip()]

    async def suggest_for_day(
        self, day: date, existing_titles: list[str] | None = None
    ) -> DaySuggestion:
        """Feasts, fasts and saints of a date, a post idea, and related projects."""
        existing_titles = existing_titles or []
        result = await self.client.generate_text(
            prompts.build_day_suggestion_prompt(day, existing_titles),
            response_schema=prompts.DAY_SUGGESTION_SCHEMA,
        )
        if not isinstance(result, dict):
            raise MalformedResponseError("The AI returned an unexpected format for day suggestions.")
        post = result.get("suggestedPost") if isinstance(result.get("suggestedPost"), dict) else {}
        recommended = result.get("recommendedTitles")
        if not isinstance(recommended, list):
            recommended = []
        return DaySuggestion(
            day=day,
            liturgical_info=str(result.get("liturgicalInfo", "")),
            post_title=str(post.get("title", "")),
            post_content=str(post.get("content", "")),
            recommended_titles=[str(t) for t in recommended][:2],
        )


__all__ = ["ASPECT_RATIOS", "ContentStudio", "guess_image_mime_type"]
