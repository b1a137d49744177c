"""Brand information, prompt templates and response schemas.

These are configuration data: workflows in `creator_hub.service` format them
and send them through `GeminiClient`.
"""

from datetime import date

from creator_hub.models import CoachingFocus, ContentType, EditorAction, ExpansionForm

BRAND_INFO = {
    "name": "Ancient Truths, Modern Times (ATMT)",
    "usp": (
        "The only blog focusing specifically on Ethiopian Orthodox Tewahedo theology with a "
        "modern, accessible format rooted in authentic tradition. Bridging ancient truths "
        "with modern times."
    ),
    "audience": (
        "18-45 year old diaspora (U.S., Canada, UK, Ethiopia), students, young professionals, "
        "seekers. Spiritually curious, disillusioned with secular culture, seeking depth and "
        "authenticity."
    ),
    "tone": (
        "Respectful, reverent, clear, compassionate, educational, authentic, and accessible "
        "(Grade 6-8 readability but theologically deep)."
    ),
}

BOOKS_INPUT_LIMIT = 3000

IDEAS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "ideas": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {"title": {"type": "STRING"}, "description": {"type": "STRING"}},
                "required": ["title", "description"],
            },
        }
    },
    "required": ["ideas"],
}

BOOKS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "books": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {"title": {"type": "STRING"}, "author": {"type": "STRING"}},
                "required": ["title", "author"],
            },
        }
    },
    "required": ["books"],
}

_BRAND_PREAMBLE = (
    'You are a content strategist for "{name}". Brand USP: {usp}. '
    "Target Audience: {audience}. Tone: {tone}."
)

_FORMAT_GUIDANCE = {
    ContentType.BLOG: "a 1200-1500 word blog post with an engaging introduction, clear H2 sections and a reflective conclusion",
    ContentType.SERMON: "a sermon manuscript with scripture readings, three main points and a closing exhortation",
    ContentType.PODCAST: "a podcast episode outline with intro, segments, talking points and outro",
    ContentType.SERIES: "a multi-part series plan with a title and summary for each installment",
    ContentType.DEVOTIONAL: "a short daily devotional with a scripture verse, reflection and prayer",
    ContentType.EBOOKS: "an e-book outline with chapter titles and chapter summaries",
    ContentType.COURSES: "a course syllabus with modules, lessons and learning outcomes",
    ContentType.VIDEOS: "a video script with scene directions and narration",
    ContentType.LYRICS: "hymn-style song lyrics with verses and a chorus",
}

ARTWORK_ANALYSIS_PROMPT = (
    "You are an art historian and theologian specializing in Ethiopian Orthodox Tewahedo "
    "iconography and sacred art. Analyze the uploaded image. Provide a detailed description "
    "of the iconography, its theological meaning, and any relevant historical or liturgical "
    "context within the Ethiopian Orthodox Tewahedo tradition. If it's not explicitly Orthodox "
    "iconography, interpret it from a general Christian sacred art perspective. Format your "
    'response in markdown, including sections for "Visual Description", "Theological '
    'Interpretation", and "Context/Significance".'
)


def brand_preamble() -> str:
    return _BRAND_PREAMBLE.format(**BRAND_INFO)


def build_ideas_prompt(topic: str) -> str:
    return (
        f'{brand_preamble()} My keyword/theme is: "{topic}". '
        "Brainstorm 5 engaging content ideas based on this theme."
    )


def build_draft_prompt(content_type: ContentType, title: str, description: str) -> str:
    guidance = _FORMAT_GUIDANCE[content_type]
    return (
        f"{brand_preamble()} Write {guidance}.\n\n"
        f"Title: {title}\n"
        f"Description: {description}\n\n"
        "Ground the content in Scripture and the teachings of the Church Fathers. "
        "Format the response in markdown."
    )


def build_podcast_script_prompt(outline: str) -> str:
    return (
        f"{brand_preamble()} Turn the following podcast outline into a full production "
        "script with speaker labels, timing cues and transitions.\n\n"
        f"Outline:\n{outline}"
    )


def build_books_prompt(topic_or_content: str) -> str:
    return (
        'You are a librarian and theologian for "Ancient Truths, Modern Times". Based on the '
        "following topic or content, recommend 3-5 highly relevant and authoritative books "
        "(titles and authors) from an Ethiopian Orthodox Tewahedo or broader Patristic "
        "perspective for further reading. If no specific books come to mind, suggest relevant "
        "themes or areas of study. Return a JSON object with a 'books' array, where each item "
        "has 'title' and 'author'.\n\n"
        f"Topic/Content:\n{topic_or_content[:BOOKS_INPUT_LIMIT]}\n"
    )


# =============================================================================
# Editor actions
# =============================================================================

SECTION_CONTEXT_LIMIT = 4000

PATRISTIC_INSIGHT_TEMPLATE = (
    "You are a Patristic scholar. Provide a brief, reverent, and insightful commentary on the "
    "following text from the perspective of the Church Fathers and Ethiopian Orthodox Tewahedo "
    "tradition. Focus on key theological points and provide a short, clear explanation. Do not "
    "exceed 200 words. \n\nText:\n{text}"
)

_ATMT_WRITER = 'You are a writer for "Ancient Truths, Modern Times."'

OUTLINE_TEMPLATES = {
    ContentType.BLOG: (
        'You are a writer for "Ancient Truths, Modern Times," a blog focused on making Ethiopian '
        "Orthodox Tewahedo theology and spirituality accessible. Your tone is reverent, insightful, "
        "and clear (around a grade 8 reading level). Generate a detailed outline for a blog post "
        'based on the title: "{title}". The outline should include a clear introduction, 3-5 main '
        "sections with sub-points, and a conclusion with a practical takeaway. Please provide the "
        "output in markdown format."
    ),
    ContentType.SERMON: (
        'You are an assistant for "Ancient Truths, Modern Times," a platform focused on Ethiopian '
        'Orthodox Tewahedo theology. Generate a sermon outline for the title: "{title}". The '
        "outline should be suitable for a homily, including an introduction (Exordium), key "
        "scriptural points to expound upon, suggestions for patristic references, a section on "
        "modern application, and a conclusion (Peroratio). Please provide the output in markdown "
        "format."
    ),
    ContentType.SERIES: (
        'You are an assistant for "Ancient Truths, Modern Times." Generate a multi-part series '
        'outline for the title: "{title}". The outline should propose 3-5 parts, each with its own '
        "title and a brief one-sentence description. Format the output in markdown."
    ),
    ContentType.DEVOTIONAL: (
        'Generate a simple outline for a short devotional email on the topic: "{title}". The '
        "outline should include a key scripture or quote, a short reflection, and a prayer prompt. "
        "Format as markdown."
    ),
    ContentType.EBOOKS: (
        'Generate a detailed table of contents for an e-book titled "{title}". The audience is '
        "interested in Ethiopian Orthodox Tewahedo theology. The table of contents should include "
        "a foreword, an introduction, several chapters with descriptive titles, and a conclusion. "
        "Format as markdown."
    ),
    ContentType.COURSES: (
        'Generate a course curriculum for a course titled "{title}". The audience is interested in '
        "Ethiopian Orthodox Tewahedo theology. The curriculum should be structured into modules, "
        "with each module containing several lesson titles. Format the output in markdown."
    ),
    ContentType.VIDEOS: (
        'Generate a video script outline for a video titled "{title}". The structure should '
        "include a Hook, Introduction, Main Points (3-4), B-Roll suggestions, a Call to Action, and "
        "an Outro. Format as markdown."
    ),
}

FULL_TEMPLATES = {
    ContentType.BLOG: (
        'You are a writer for "Ancient Truths, Modern Times," a blog focused on making Ethiopian '
        "Orthodox Tewahedo theology and spirituality accessible. Your tone is reverent, insightful, "
        "and clear (around a grade 8 reading level). Write a full, ready-to-publish blog post based "
        "on the following title and outline. Expand on each point in the outline, provide context, "
        "scripture references where appropriate, and conclude with a practical takeaway for modern "
        'life. \n\n**Title:** "{title}"\n\n**Outline:**\n{content}'
    ),
    ContentType.SERMON: (
        'You are a homilist for "Ancient Truths, Modern Times," a platform focused on Ethiopian '
        "Orthodox Tewahedo theology. Your tone is pastoral, reverent, and clear, suitable for oral "
        "delivery. Write a full, ready-to-preach sermon manuscript based on the following title and "
        "homiletic outline. Flesh out each section, weaving in scriptural exegesis, patristic "
        "wisdom, and practical application for the congregation. Ensure the language flows well "
        'when spoken. \n\n**Title:** "{title}"\n\n**Outline:**\n{content}'
    ),
    ContentType.PODCAST: (
        'You are a scriptwriter for "{brand}". Tone: {tone}. Write a full podcast script based on '
        'the title "{title}" and the following outline/content:\n\n{content}'
    ),
    ContentType.DEVOTIONAL: (
        f"{_ATMT_WRITER} Write a short, pastoral, and reflective devotional email (around 200-250 "
        "words) based on the following title and outline. Your tone should be warm and "
        'encouraging. \n\n**Title:** "{title}"\n\n**Outline:**\n{content}'
    ),
    ContentType.EBOOKS: (
        f'{_ATMT_WRITER} Write a compelling introduction for the e-book titled "{{title}}", based '
        "on the provided table of contents. The introduction should hook the reader, explain the "
        "book's purpose, and give an overview of the chapters to come. \n\n**Table of Contents:**"
        "\n{content}"
    ),
    ContentType.COURSES: (
        'You are an educator for "Ancient Truths, Modern Times." Write an engaging welcome message '
        'for the course titled "{title}", based on the provided curriculum. The welcome should '
        "excite the student, set expectations, and briefly introduce the modules. \n\n**Full "
        "Curriculum:**\n{content}"
    ),
    ContentType.VIDEOS: (
        'You are a scriptwriter for "Ancient Truths, Modern Times." Write a full, engaging video '
        "script based on the title and outline provided. The script should be written in a "
        "natural, spoken-word style. Include cues for visuals (B-roll), narration, and sound "
        'effects using the prefixes "VISUAL:", "NARRATOR:", and "SFX:". \n\n**Title:** "{title}"'
        "\n\n**Outline:**\n{content}"
    ),
    ContentType.SERIES: (
        f"{_ATMT_WRITER} Your task is to expand on the provided series outline. For each part "
        "listed in the outline, write a full, detailed section of content (around 200-300 words). "
        'Maintain a reverent and accessible tone. \n\n**Series Title:** "{title}"\n\n**Outline:**'
        "\n{content}"
    ),
}

SECTION_TEMPLATES = {
    ContentType.EBOOKS: (
        'You are an author for "Ancient Truths, Modern Times." Your task is to write a full '
        'chapter for an e-book titled "{title}". The full table of contents is provided below for '
        'context. Your **sole task** is to write the complete text for the chapter titled: '
        '"{section}". **Do not** write any other chapters or repeat content from other chapter '
        "titles listed in the table of contents. The chapter should be detailed, insightful, "
        "well-structured, and written in a reverent and accessible tone suitable for the target "
        "audience. \n\n**Full Table of Contents:**\n{content}\n\n**Chapter to Write:**\n{section}"
    ),
    ContentType.COURSES: (
        'You are an educator for "Ancient Truths, Modern Times." Your task is to write the full '
        'lesson content for a course titled "{title}". The full curriculum is provided below for '
        "context. Your **sole task** is to write the complete text for the lesson titled: "
        '"{section}". The lesson should be clear, informative, and engaging for the target '
        "audience. \n\n**Full Curriculum:**\n{content}\n\n**Lesson to Write:**\n{section}"
    ),
    ContentType.SERIES: (
        f"{_ATMT_WRITER} Your task is to write the full content for a part of a series titled "
        '"{title}". The full series outline is provided below for context. Your **sole task** is '
        'to write the complete text for the part titled: "{section}". The content should be '
        "detailed, insightful, well-structured, and written in a reverent and accessible tone "
        "suitable for the target audience. \n\n**Full Series Outline:**\n{content}\n\n**Part to "
        "Write:**\n{section}"
    ),
}

TEXT_ACTION_TEMPLATES = {
    EditorAction.COPY_EDIT: (
        'You are a meticulous copy editor for "Ancient Truths, Modern Times," a blog with a '
        "reverent and accessible tone. Review the following blog post. Correct any grammatical "
        "errors, spelling mistakes, or punctuation issues. Improve sentence structure and flow for "
        "better readability, but do not change the core theological message or the overall "
        "meaning. Return only the final, polished text. \n\n**Post:**\n{content}"
    ),
    EditorAction.IMPROVE: (
        "Improve the following text for clarity, engagement, and reverence, in the style of a "
        "faith-based storyteller for the 'Ancient Truths, Modern Times' blog. Keep the core "
        "message intact:\n\n{content}"
    ),
    EditorAction.SUMMARIZE: (
        "Summarize the following text into a few key bullet points, using markdown:\n\n{content}"
    ),
    EditorAction.TRANSLATE_AMHARIC: (
        "You are an expert translator specializing in theological and spiritual texts for the "
        "Ethiopian Orthodox Tewahedo Church. Translate the following English text into Amharic, "
        "ensuring the tone is reverent and the theological terms are accurate. Return only the "
        "translated Amharic text.\n\n**English Text:**\n{content}"
    ),
    EditorAction.IMAGE_PROMPT: (
        "You are an expert prompt engineer for an image generation model. Based on the following "
        "text, create a detailed, visually descriptive prompt that captures the core essence of the "
        "text in a single, evocative paragraph. The prompt should describe the scene, style, "
        "lighting, and mood. Return only the generated prompt text.\n\n**Text:**\n{content}"
    ),
}


def build_patristic_insight_prompt(text: str) -> str:
    return PATRISTIC_INSIGHT_TEMPLATE.format(text=text)


def build_editor_prompt(
    action: EditorAction, content_type: ContentType, title: str, content: str
) -> str:
    """Prompt for an editor action on a working draft.

    Raises:
        ValueError: if the action has no template for `content_type`
    """
    if action is EditorAction.OUTLINE:
        template = OUTLINE_TEMPLATES.get(content_type)
    elif action is EditorAction.WRITE_FULL:
        template = FULL_TEMPLATES.get(content_type)
    else:
        template = TEXT_ACTION_TEMPLATES[action]

    if template is None:
        raise ValueError(f"'{action.value}' is not available for {content_type.label.lower()}")
    return template.format(
        title=title, content=content, brand=BRAND_INFO["name"], tone=BRAND_INFO["tone"]
    )


def build_section_prompt(
    content_type: ContentType, title: str, outline: str, section_title: str
) -> str:
    """Prompt for one chapter, lesson or series part, with the outline as context."""
    template = SECTION_TEMPLATES.get(content_type)
    if template is None:
        raise ValueError(
            f"Sections can only be written for e-books, courses and series, not "
            f"{content_type.label.lower()}"
        )
    return template.format(
        title=title, content=outline[:SECTION_CONTEXT_LIMIT], section=section_title
    )


# =============================================================================
# Scripture study
# =============================================================================

EXEGESIS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "exegesis": {"type": "STRING"},
        "homilyIdeas": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {"title": {"type": "STRING"}, "fathers": {"type": "STRING"}},
                "required": ["title", "fathers"],
            },
        },
    },
    "required": ["exegesis", "homilyIdeas"],
}

_EXPANSION_INSTRUCTIONS = {
    ExpansionForm.COMMENTARY: (
        "You are a scholar of Patristics and Orthodox theology. Based on the following "
        "information, write a detailed extended patristic commentary. Focus on deep theological "
        "exploration, extensive patristic and scriptural references, and maintain a scholarly yet "
        "accessible tone for the ATMT audience (Grade 6-8 readability). Structure it with an "
        "introduction, several thematic sections, and a conclusion. Provide the output in markdown."
    ),
    ExpansionForm.HOMILY: (
        'You are a homilist for "Ancient Truths, Modern Times." Based on the following '
        "information, write a full, ready-to-preach homily manuscript. Maintain a pastoral, "
        "reverent, and clear tone suitable for oral delivery to the ATMT audience. Incorporate "
        "scriptural exegesis, patristic wisdom, and practical application. Structure it with a "
        "clear title, introduction, main points, and conclusion. Provide the output in markdown."
    ),
    ExpansionForm.ESSAY: (
        'You are an academic theologian writing for "Ancient Truths, Modern Times." Based on the '
        "following information, write a comprehensive theological essay. This essay should "
        "provide a structured, argumentative, and in-depth academic treatment of the theological "
        "implications. Include a clear thesis, well-reasoned arguments supported by scripture and "
        "patristic sources, and a strong conclusion. Maintain a scholarly yet accessible tone for "
        "the ATMT audience (Grade 6-8 readability). Provide the output in markdown."
    ),
}


def build_exegesis_prompt(passage: str) -> str:
    return (
        "Act as a scholar of Patristics and Orthodox theology. Provide an exegesis of the "
        f'following Bible passage or theological topic: "{passage}". Explain its meaning and then '
        "provide insights and relevant quotes from the Church Fathers (e.g., St. John Chrysostom, "
        "St. Athanasius, St. Cyril of Alexandria, St. Basil the Great, St. Gregory of Nyssa, "
        "St. Gregory the Theologian, St. Ephrem the Syrian, St. Isaac the Syrian, St. Severus of "
        "Antioch, St. Dioscorus of Alexandria) that illuminate the passage from an Orthodox "
        "perspective. Then, based on your exegesis, brainstorm 3-4 thematic homily titles. For "
        "each title, list the key Church Father(s) whose work is most relevant. The response must "
        "be in JSON format."
    )


def build_expansion_prompt(
    form: ExpansionForm, passage: str, commentary: str, title: str = ""
) -> str:
    heading = f'Title: "{title}"\n\n' if title else ""
    return (
        f"{_EXPANSION_INSTRUCTIONS[form]}\n\n{heading}"
        f'Bible passage/topic: "{passage}"\n\nInitial Exegesis:\n{commentary}'
    )


# =============================================================================
# Sermon coaching
# =============================================================================

COACHING_TEMPLATES = {
    CoachingFocus.THEOLOGY: (
        "You are a theological reviewer specializing in Ethiopian Orthodox Tewahedo doctrine. "
        'Review the following sermon titled "{title}". Check for theological accuracy, consistency '
        "with patristic teachings, and appropriate use of scripture. Provide constructive feedback "
        "in markdown format, highlighting strengths and areas for refinement."
    ),
    CoachingFocus.CLARITY: (
        "You are a writing and public speaking coach. Analyze the following sermon titled "
        '"{title}". Check for clarity, logical flow, and structure. Is the main point clear? Does '
        "it progress logically? Is the language accessible? Provide actionable suggestions for "
        "improvement in markdown format."
    ),
    CoachingFocus.ENGAGEMENT: (
        'You are a communications expert. Review the sermon titled "{title}". Suggest ways to make '
        "it more engaging for a modern audience. Suggest adding rhetorical questions, illustrative "
        "stories, or modern-day parallels that connect with the theme, without compromising the "
        "reverent tone. Provide your suggestions as a list in markdown format."
    ),
    CoachingFocus.DELIVERY: (
        'You are a public speaking coach. Based on the text of the sermon titled "{title}", '
        "provide practical delivery tips. Suggest where to pause for effect, which phrases to "
        "emphasize, and general advice on tone, pacing, and body language to effectively convey "
        "the message. Format the tips as a list in markdown."
    ),
}


def build_coaching_prompt(focus: CoachingFocus, title: str, content: str) -> str:
    return COACHING_TEMPLATES[focus].format(title=title) + f" \n\nSermon Content:\n{content}"


# =============================================================================
# Title and calendar suggestions
# =============================================================================

TITLES_SCHEMA = {
    "type": "OBJECT",
    "properties": {"titles": {"type": "ARRAY", "items": {"type": "STRING"}}},
    "required": ["titles"],
}

DAY_SUGGESTION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "liturgicalInfo": {"type": "STRING"},
        "suggestedPost": {
            "type": "OBJECT",
            "properties": {"title": {"type": "STRING"}, "content": {"type": "STRING"}},
        },
        "recommendedTitles": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["liturgicalInfo", "suggestedPost"],
}

_TITLE_TONES = {
    ContentType.SERMON: "pastoral, reverent, and suitable for a sermon",
    ContentType.DEVOTIONAL: "pastoral and reflective",
}


def build_titles_prompt(content_type: ContentType, topic: str) -> str:
    tone = _TITLE_TONES.get(content_type, "reverent, insightful, and engaging")
    return (
        f"Brainstorm a list of 5 {content_type.label.lower()} titles on the theme "
        f'"{topic}". The work is for "Ancient Truths, Modern Times," which focuses on making '
        "Ethiopian Orthodox Tewahedo theology and spirituality accessible to a modern, "
        f"English-speaking audience. The tone should be {tone}. Return a JSON object with a "
        "'titles' array of strings."
    )


def build_day_suggestion_prompt(day: date, existing_titles: list[str]) -> str:
    return (
        f"For the Gregorian date {day:%B} {day.day}, {day:%Y}, what are the relevant Ethiopian "
        "Orthodox Tewahedo feasts, fasts, or saints commemorated? Based on that, suggest one new, "
        "short social media post (title and content). Also, analyze this list of existing project "
        "titles and recommend up to 2 that are most relevant to the day: "
        f"[{', '.join(existing_titles)}]. Return a JSON object. If there is no specific "
        "commemoration, state that in the liturgicalInfo field."
    )
