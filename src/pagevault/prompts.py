"""Prompt templates for summaries and page chat."""

SYSTEM_PROMPT = (
    "You are an expert note-taking assistant for an Obsidian vault. Your job "
    "is to help the user understand and organize web page content.\n"
    "Always answer in Markdown and keep the output concise and clear.\n"
    "If the page content is not enough to answer a question, say "
    "\"The page does not provide this information\" instead of making "
    "something up."
)

DEFAULT_CUSTOM_PROMPT = (
    "Summarize the following web page.\n\n"
    "Page title: {{title}}\n"
    "Page URL: {{url}}\n\n"
    "Page content:\n"
    "{{content}}\n\n"
    "Write the summary in Markdown."
)

_PAGE_HEADER = (
    "Page title: {{title}}\n"
    "Page URL: {{url}}\n\n"
    "Page content:\n"
    "{{content}}\n\n"
)

SUMMARY_TEMPLATES = {
    "brief": {
        "name": "Brief summary",
        "prompt": (
            "Write a brief summary of the following web page.\n\n"
            + _PAGE_HEADER
            + "Use this Markdown layout:\n\n"
            "## TL;DR\n"
            "[1-2 sentences capturing the core message]\n\n"
            "## Key Points\n"
            "- [point 1]\n"
            "- [point 2]\n"
            "- [point 3]\n\n"
            "## Suggested Tags\n"
            "#tag1 #tag2 #tag3"
        ),
    },
    "learning": {
        "name": "Learning notes",
        "prompt": (
            "Create study notes from the following web page.\n\n"
            + _PAGE_HEADER
            + "Use this Markdown layout:\n\n"
            "## Core Concepts\n"
            "[main concepts and definitions]\n\n"
            "## Key Points\n"
            "### [subtopic 1]\n"
            "- [point]\n"
            "- [point]\n\n"
            "### [subtopic 2]\n"
            "- [point]\n"
            "- [point]\n\n"
            "## Notable Quotes\n"
            "> [key sentences quoted from the source]\n\n"
            "## Personal Reflections\n"
            "[leave empty for the reader]\n\n"
            "## Related Resources\n"
            "- [links or resources mentioned in the content]\n\n"
            "## Tags\n"
            "#learning #[topic]"
        ),
    },
    "meeting": {
        "name": "Meeting / product analysis",
        "prompt": (
            "Create meeting or product analysis notes from the following web page.\n\n"
            + _PAGE_HEADER
            + "Use this Markdown layout:\n\n"
            "## Background and Goals\n"
            "[context and main goals]\n\n"
            "## Key Decisions\n"
            "- **Decision 1**: [description]\n"
            "- **Decision 2**: [description]\n\n"
            "## Action Items\n"
            "- [ ] [action item 1]\n"
            "- [ ] [action item 2]\n\n"
            "## Important Information\n"
            "- [key fact 1]\n"
            "- [key fact 2]\n\n"
            "## Next Steps\n"
            "[follow-up steps]\n\n"
            "## Tags\n"
            "#meeting #product #analysis"
        ),
    },
    "academic": {
        "name": "Paper / technical article",
        "prompt": (
            "Create notes on the academic or technical article below.\n\n"
            + _PAGE_HEADER
            + "Use this Markdown layout:\n\n"
            "## Background\n"
            "[research background and motivation]\n\n"
            "## Main Contributions\n"
            "- [contribution 1]\n"
            "- [contribution 2]\n\n"
            "## Methodology\n"
            "[methods or techniques used]\n\n"
            "## Findings and Conclusions\n"
            "- [finding 1]\n"
            "- [finding 2]\n\n"
            "## Strengths and Limitations\n"
            "**Strengths**:\n"
            "- [strength 1]\n\n"
            "**Limitations**:\n"
            "- [limitation 1]\n\n"
            "## Related Work\n"
            "[related research mentioned in the article]\n\n"
            "## Personal Assessment\n"
            "[leave empty for the reader]\n\n"
            "## Tags\n"
            "#research #paper #academic"
        ),
    },
    # The user's custom_prompt setting is used instead.
    "custom": {
        "name": "Custom template",
        "prompt": "",
    },
}


def fill_template(template: str, variables: dict[str, str]) -> str:
    """Replace every ``{{key}}`` in template with the matching value."""
    result = template
    for key, value in variables.items():
        result = result.replace("{{" + key + "}}", value)
    return result


def chat_system_prompt(page_title: str, page_url: str) -> str:
    """System prompt for chatting about a single page."""
    return (
        f"{SYSTEM_PROMPT}\n\n"
        "You are helping the user understand the following web page:\n"
        f"Title: {page_title}\n"
        f"URL: {page_url}\n\n"
        "The user will ask questions about this page. Answer from the page "
        "content and quote the original text where useful. If a question "
        "goes beyond the page content, say so clearly."
    )
