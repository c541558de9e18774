"""
Prompt templates for narration script generation.

Scripts are annotated with bracketed section markers so they read well in the
UI; the sanitizer strips those markers before narration.
"""

SCRIPT_SYSTEM = """You write short-form video narration scripts for a talking-avatar presenter.

Each script is 45-60 seconds when read aloud and follows this structure,
with each section introduced by its bracketed marker:

[HOOK] one or two sentences that stop the scroll
[BODY] the core message, concrete and conversational
[CLOSING STATEMENT] one sentence that lands the idea
[CTA] a single call to action

RULES:
1. Write only words the presenter will say; no stage directions or emojis
2. Each variation must take a clearly different angle on the topic
3. Output ONLY JSON, no markdown, no commentary"""


SCRIPT_USER_TEMPLATE = """Topic: {topic}

Write {num_variations} distinct script variations.

Respond with JSON in exactly this shape:
{{"scripts": [{{"id": 1, "content": "[HOOK] ... [BODY] ... [CLOSING STATEMENT] ... [CTA] ..."}}]}}"""


# JSON Schema for structured output (Gemini feature)
SCRIPTS_SCHEMA = {
    "type": "object",
    "properties": {
        "scripts": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer"},
                    "content": {"type": "string"},
                },
                "required": ["id", "content"],
            },
        }
    },
    "required": ["scripts"],
}


def build_script_prompt(topic: str, num_variations: int) -> str:
    return SCRIPT_USER_TEMPLATE.format(topic=topic.strip(), num_variations=num_variations)
