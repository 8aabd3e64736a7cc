"""Prompt construction for highlight-ai."""

MAX_SELECTION_LENGTH = 20000

ACTIONS: dict[str, str] = {
    "explain": "Explain the following text in plain language.",
    "summarize": "Summarize the following text in a few sentences.",
    "improve": "Improve the writing of the following text. Keep its meaning and tone.",
    "fix-grammar": (
        "Fix the spelling and grammar of the following text. "
        "Reply with the corrected text only."
    ),
    "translate": "Translate the following text to English. Reply with the translation only.",
    "simplify": "Rewrite the following text so that it is easier to understand.",
    "bullet-points": "Turn the following text into a concise bullet-point list.",
}

DEFAULT_ACTION = "explain"


def build_prompt(
    selection: str, action: str | None = None, instruction: str | None = None
) -> str:
    """Combine an instruction with the selected text.

    A custom instruction wins over a named action; with neither, the
    default action is used.
    """
    if not selection.strip():
        raise ValueError("No text selected.")
    if len(selection) > MAX_SELECTION_LENGTH:
        raise ValueError(
            f"Selection is too long ({len(selection)} characters). "
            f"Please keep selections under {MAX_SELECTION_LENGTH} characters."
        )

    if instruction and instruction.strip():
        text = instruction.strip()
    else:
        name = action or DEFAULT_ACTION
        if name not in ACTIONS:
            raise ValueError(
                f"Unknown action {name!r}. Choose one of: {', '.join(ACTIONS)}"
            )
        text = ACTIONS[name]

    return f'{text}\n\n"""\n{selection}\n"""'
