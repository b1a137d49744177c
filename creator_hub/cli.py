"""CLI for the ATMT Creator Hub content studio."""

import argparse
import asyncio
import logging
import sys
from datetime import date
from pathlib import Path

from core.errors import (
    ConfigurationError,
    ContentBlockedError,
    GeminiError,
    MalformedResponseError,
    RetriesExhaustedError,
    StructuredOutputError,
    TerminalClientError,
)
from core.gemini import GeminiClient
from core.settings import settings
from creator_hub import utils
from creator_hub.models import CoachingFocus, ContentIdea, ContentType, EditorAction, ExpansionForm
from creator_hub.service import ASPECT_RATIOS, ContentStudio, guess_image_mime_type

logger = logging.getLogger(__name__)


def setup_logging():
    """Configure basic logging for the application."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def describe_error(error: Exception) -> str:
    """User-facing message for each failure kind."""
    if isinstance(error, ConfigurationError):
        return f"Configuration error: {error}"
    if isinstance(error, ContentBlockedError):
        return f"The request was blocked by content policy ({error.reason}). Rephrase and try again."
    if isinstance(error, RetriesExhaustedError):
        return (
            f"The AI service is busy or unreachable (gave up after {error.attempts} attempts). "
            "Please try again later."
        )
    if isinstance(error, TerminalClientError):
        return f"The AI service rejected the request (HTTP {error.status_code}): {error.message}"
    if isinstance(error, StructuredOutputError):
        return f"Could not understand the AI's response: {error}"
    if isinstance(error, MalformedResponseError):
        return f"The AI returned an unexpected response: {error}"
    return f"AI error: {error}"


def _run(coro_factory) -> int:
    """Open a client, run one workflow, map failures to an exit code."""

    async def _main():
        async with GeminiClient.from_settings(settings) as client:
            return await coro_factory(ContentStudio(client))

    try:
        asyncio.run(_main())
    except GeminiError as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"Error: {describe_error(e)}", file=sys.stderr)
        return 1
    except (ValueError, OSError) as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def command_ideas(args) -> int:
    """Brainstorm ideas for a topic and save them as markdown."""

    async def workflow(studio: ContentStudio):
        ideas = await studio.brainstorm_ideas(args.topic)
        text = f"# Ideas: {args.topic}\n\n" + "".join(
            f"{i}. {idea}\n" for i, idea in enumerate(ideas, 1)
        )
        for i, idea in enumerate(ideas, 1):
            logger.info(f"{i}. {idea.title}")
        utils.save_text(text, utils.build_output_stem(f"ideas {args.topic}"), settings.DRAFTS_OUTPUT_DIR)

    return _run(workflow)


def command_draft(args) -> int:
    """Draft content for an idea (optionally with books and a podcast script)."""
    content_type = ContentType(args.type)
    idea = ContentIdea(title=args.title, description=args.description or args.title)

    async def workflow(studio: ContentStudio):
        draft = await studio.draft_content(content_type, idea, include_books=args.books)
        utils.save_draft(draft, settings.DRAFTS_OUTPUT_DIR, as_json=args.json)
        if args.podcast_script:
            script = await studio.refine_podcast_script(draft)
            utils.save_draft(script, settings.DRAFTS_OUTPUT_DIR, as_json=args.json)

    return _run(workflow)


def command_books(args) -> int:
    """Recommend further reading for a topic."""

    async def workflow(studio: ContentStudio):
        books = await studio.recommend_books(args.topic)
        text = f"# Further Reading: {args.topic}\n\n" + "".join(f"- {b}\n" for b in books)
        utils.save_text(text, utils.build_output_stem(f"books {args.topic}"), settings.DRAFTS_OUTPUT_DIR)

    return _run(workflow)


def command_analyze_image(args) -> int:
    """Analyze an icon or piece of sacred art."""
    image_path = Path(args.image)

    async def workflow(studio: ContentStudio):
        mime_type = guess_image_mime_type(image_path)
        analysis = await studio.analyze_artwork(image_path.read_bytes(), mime_type)
        utils.save_text(
            analysis, utils.build_output_stem(f"analysis {image_path.stem}"), settings.DRAFTS_OUTPUT_DIR
        )

    return _run(workflow)


def command_image(args) -> int:
    """Generate one or more images for a prompt."""

    async def workflow(studio: ContentStudio):
        images = await studio.generate_artwork(args.prompt, args.aspect_ratio, args.variations)
        utils.save_images(images, args.prompt, settings.IMAGES_OUTPUT_DIR)

    return _run(workflow)


def command_speak(args) -> int:
    """Narrate text (inline or from a file) to a .wav file."""
    if args.file:
        source = Path(args.file)
        title = source.stem
    else:
        source = None
        title = args.text[:40]

    async def workflow(studio: ContentStudio):
        text = source.read_text(encoding="utf-8") if source else args.text
        audio = await studio.narrate(text, args.voice)
        utils.save_speech(audio, title, settings.AUDIO_OUTPUT_DIR)

    return _run(workflow)


def _read_content(path: str | None) -> str:
    return Path(path).read_text(encoding="utf-8") if path else ""


def command_insight(args) -> int:
    """Patristic commentary on a passage."""

    async def workflow(studio: ContentStudio):
        text = args.text or _read_content(args.file)
        insight = await studio.patristic_insight(text)
        utils.save_text(
            f"# Patristic Insight\n\n> {text.strip()}\n\n{insight}\n",
            utils.build_output_stem(f"insight {text[:40]}"),
            settings.DRAFTS_OUTPUT_DIR,
        )

    return _run(workflow)


def command_edit(args) -> int:
    """Apply an editor action to a working draft."""
    action = EditorAction(args.action)
    content_type = ContentType(args.type)

    async def workflow(studio: ContentStudio):
        content = _read_content(args.file)
        result = await studio.apply_editor_action(action, content_type, args.title, content)
        if action is EditorAction.SUMMARIZE:
            result = f"{content}\n\n---\n\n**AI Summary:**\n\n{result}"
        utils.save_text(
            result, utils.build_output_stem(f"{args.title} {action.value}"), settings.DRAFTS_OUTPUT_DIR
        )

    return _run(workflow)


def command_section(args) -> int:
    """Write one chapter, lesson or series part from an outline file."""
    content_type = ContentType(args.type)

    async def workflow(studio: ContentStudio):
        outline = _read_content(args.outline)
        text = await studio.write_section(content_type, args.title, outline, args.section)
        utils.save_text(
            f"## {args.section}\n\n{text}\n",
            utils.build_output_stem(f"{args.title} {args.section}"),
            settings.DRAFTS_OUTPUT_DIR,
        )

    return _run(workflow)


def command_exegesis(args) -> int:
    """Exegesis of a passage, optionally expanded into a longer piece."""

    async def workflow(studio: ContentStudio):
        exegesis = await studio.exegete(args.passage)
        for idea in exegesis.homily_ideas:
            logger.info(f"Homily idea: {idea.title}")
        utils.save_text(
            exegesis.to_markdown(),
            utils.build_output_stem(f"exegesis {args.passage}"),
            settings.DRAFTS_OUTPUT_DIR,
        )
        if args.expand:
            form = ExpansionForm(args.expand)
            text = await studio.expand_exegesis(exegesis, form, args.homily_title or "")
            utils.save_text(
                text,
                utils.build_output_stem(f"{form.value} {args.passage}"),
                settings.DRAFTS_OUTPUT_DIR,
            )

    return _run(workflow)


def command_coach(args) -> int:
    """Review a sermon for one or more coaching aspects."""
    focuses = [CoachingFocus(f) for f in args.focus] or list(CoachingFocus)

    async def workflow(studio: ContentStudio):
        content = _read_content(args.file)
        sections = []
        for focus in focuses:
            feedback = await studio.coach_sermon(args.title, content, focus)
            sections.append(f"## {focus.label}\n\n{feedback.strip()}\n")
        utils.save_text(
            f"# Sermon Coaching: {args.title}\n\n" + "\n".join(sections),
            utils.build_output_stem(f"coaching {args.title}"),
            settings.DRAFTS_OUTPUT_DIR,
        )

    return _run(workflow)


def command_titles(args) -> int:
    """Suggest titles of one content type for a theme."""
    content_type = ContentType(args.type)

    async def workflow(studio: ContentStudio):
        titles = await studio.suggest_titles(content_type, args.topic)
        for title in titles:
            print(title)
        utils.save_text(
            f"# {content_type.label} Titles: {args.topic}\n\n"
            + "".join(f"- {t}\n" for t in titles),
            utils.build_output_stem(f"titles {args.topic}"),
            settings.DRAFTS_OUTPUT_DIR,
        )

    return _run(workflow)


def command_day(args) -> int:
    """Liturgical context and a post idea for a date."""
    day = args.date or date.today()

    async def workflow(studio: ContentStudio):
        suggestion = await studio.suggest_for_day(day, args.project)
        utils.save_text(
            suggestion.to_markdown(),
            utils.build_output_stem(f"day {day.isoformat()}"),
            settings.DRAFTS_OUTPUT_DIR,
        )

    return _run(workflow)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="ATMT Creator Hub - AI-assisted content studio",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    ideas_parser = subparsers.add_parser("ideas", help="Brainstorm content ideas for a theme")
    ideas_parser.add_argument("-t", "--topic", required=True, help="Keyword or theme.")
    ideas_parser.set_defaults(handler=command_ideas)

    draft_parser = subparsers.add_parser("draft", help="Draft content for an idea")
    draft_parser.add_argument(
        "--type",
        required=True,
        choices=[t.value for t in ContentType],
        help="Kind of content to produce.",
    )
    draft_parser.add_argument("--title", required=True, help="Idea title.")
    draft_parser.add_argument("--description", default=None, help="Idea description.")
    draft_parser.add_argument(
        "--books", action="store_true", help="Append recommended books for further reading."
    )
    draft_parser.add_argument(
        "--podcast-script",
        action="store_true",
        help="Also produce a production script (podcast drafts only).",
    )
    draft_parser.add_argument("--json", action="store_true", help="Save as JSON instead of markdown.")
    draft_parser.set_defaults(handler=command_draft)

    books_parser = subparsers.add_parser("books", help="Recommend books for a topic")
    books_parser.add_argument("-t", "--topic", required=True, help="Topic or content excerpt.")
    books_parser.set_defaults(handler=command_books)

    analyze_parser = subparsers.add_parser("analyze-image", help="Analyze sacred art / iconography")
    analyze_parser.add_argument("-i", "--image", required=True, help="Path to the image file.")
    analyze_parser.set_defaults(handler=command_analyze_image)

    image_parser = subparsers.add_parser("image", help="Generate images")
    image_parser.add_argument("-p", "--prompt", required=True, help="Image prompt.")
    image_parser.add_argument("--aspect-ratio", default="1:1", choices=ASPECT_RATIOS)
    image_parser.add_argument("-n", "--variations", type=int, default=1, help="Number of images.")
    image_parser.set_defaults(handler=command_image)

    speak_parser = subparsers.add_parser("speak", help="Narrate text to a .wav file")
    source = speak_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="Text to narrate.")
    source.add_argument("--file", help="Path to a text/markdown file to narrate.")
    speak_parser.add_argument(
        "--voice", default=None, help=f"Prebuilt voice name (default: {settings.DEFAULT_VOICE})."
    )
    speak_parser.set_defaults(handler=command_speak)

    type_choices = [t.value for t in ContentType]

    insight_parser = subparsers.add_parser("insight", help="Patristic commentary on a passage")
    insight_source = insight_parser.add_mutually_exclusive_group(required=True)
    insight_source.add_argument("--text", help="Passage to comment on.")
    insight_source.add_argument("--file", help="Path to a file with the passage.")
    insight_parser.set_defaults(handler=command_insight)

    edit_parser = subparsers.add_parser("edit", help="Apply an AI editor action to a draft")
    edit_parser.add_argument(
        "action", choices=[a.value for a in EditorAction], help="Editor action to run."
    )
    edit_parser.add_argument("--type", required=True, choices=type_choices, help="Content type.")
    edit_parser.add_argument("--title", required=True, help="Working title.")
    edit_parser.add_argument("--file", default=None, help="Draft to work on (not needed for outline).")
    edit_parser.set_defaults(handler=command_edit)

    section_parser = subparsers.add_parser(
        "section", help="Write one chapter, lesson or series part"
    )
    section_parser.add_argument(
        "--type", required=True, choices=["ebooks", "courses", "series"], help="Content type."
    )
    section_parser.add_argument("--title", required=True, help="Title of the whole work.")
    section_parser.add_argument("--outline", required=True, help="Path to the outline file.")
    section_parser.add_argument("--section", required=True, help="Section title to write.")
    section_parser.set_defaults(handler=command_section)

    exegesis_parser = subparsers.add_parser("exegesis", help="Patristic exegesis of a passage")
    exegesis_parser.add_argument("-p", "--passage", required=True, help="Bible passage or topic.")
    exegesis_parser.add_argument(
        "--expand",
        choices=[f.value for f in ExpansionForm],
        default=None,
        help="Also write a longer piece from the exegesis.",
    )
    exegesis_parser.add_argument(
        "--homily-title", default=None, help="Title for the expanded piece."
    )
    exegesis_parser.set_defaults(handler=command_exegesis)

    coach_parser = subparsers.add_parser("coach", help="Coaching feedback on a sermon")
    coach_parser.add_argument("--title", required=True, help="Sermon title.")
    coach_parser.add_argument("--file", required=True, help="Path to the sermon text.")
    coach_parser.add_argument(
        "--focus",
        action="append",
        default=[],
        choices=[f.value for f in CoachingFocus],
        help="Aspect to review (repeatable; default: all).",
    )
    coach_parser.set_defaults(handler=command_coach)

    titles_parser = subparsers.add_parser("titles", help="Suggest titles for a theme")
    titles_parser.add_argument("--type", required=True, choices=type_choices, help="Content type.")
    titles_parser.add_argument("-t", "--topic", required=True, help="Theme or category.")
    titles_parser.set_defaults(handler=command_titles)

    day_parser = subparsers.add_parser("day", help="Feasts, fasts and a post idea for a date")
    day_parser.add_argument(
        "--date", type=date.fromisoformat, default=None, help="YYYY-MM-DD (default: today)."
    )
    day_parser.add_argument(
        "--project",
        action="append",
        default=[],
        help="Existing project title to match against the day (repeatable).",
    )
    day_parser.set_defaults(handler=command_day)

    return parser


def validate_args(parser: argparse.ArgumentParser, args) -> None:
    """Reject option combinations argparse cannot express."""
    if args.command == "draft" and args.podcast_script and args.type != ContentType.PODCAST.value:
        parser.error("--podcast-script only applies to --type podcast")
    if args.command == "edit" and args.action != EditorAction.OUTLINE.value and not args.file:
        parser.error(f"'{args.action}' needs --file with the draft to work on")


def main(argv: list[str] | None = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        sys.exit(1)
    validate_args(parser, args)

    setup_logging()
    sys.exit(handler(args))


if __name__ == "__main__":
    main()
