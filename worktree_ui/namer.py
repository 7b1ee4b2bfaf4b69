"""Suggest branch names for worktrees from their first prompt."""

import os
import re
import sys

DEFAULT_MODEL = "claude-haiku-4-5"

# Branch naming prompt template
NAMING_PROMPT = '''Suggest a git branch name for the work described in this request.

Request:
{prompt}

RULES:
- lowercase kebab-case, 2-5 words, max 40 chars
- ASCII letters, digits and hyphens only
- no prefixes like "feature/" or "fix/"
- respond with the branch name only, nothing else'''

_NON_SLUG = re.compile(r"[^a-z0-9]+")
_MAX_BRANCH_LENGTH = 40


def slugify_prompt(prompt: str, max_words: int = 5) -> str:
    """Turn a prompt into a kebab-case branch name without calling any API.

    Example:
        "Add user settings page!" -> "add-user-settings-page"
    """
    words = _NON_SLUG.sub(" ", prompt.lower()).split()
    return "-".join(words[:max_words])


def suggest_branch_name(prompt: str, model: str = DEFAULT_MODEL, use_ai: bool = True) -> str:
    """Suggest a branch name for a prompt.

    Asks Claude when ``use_ai`` is set; falls back to slugify_prompt() when
    the anthropic package or ANTHROPIC_API_KEY is missing, or the call fails.

    Args:
        prompt: The first meaningful prompt of the worktree's session.
        model: Claude model to use for naming.
        use_ai: If False, only slugify.

    Returns:
        A kebab-case branch name (may be empty for prompts with no words).
    """
    if use_ai:
        name = _ask_claude(prompt, model)
        if name:
            return name
    return slugify_prompt(prompt)


def _ask_claude(prompt: str, model: str) -> str:
    try:
        import anthropic
    except ImportError:
        print("Warning: anthropic package not installed. Run: pip install anthropic", file=sys.stderr)
        return ""

    api_key = os.environ.get("ANTHROPIC_API_KEY")
    if not api_key:
        print("Warning: ANTHROPIC_API_KEY environment variable not set", file=sys.stderr)
        return ""

    client = anthropic.Anthropic(api_key=api_key)

    try:
        response = client.messages.create(
            model=model,
            max_tokens=50,
            messages=[{"role": "user", "content": NAMING_PROMPT.format(prompt=prompt)}]
        )
    except anthropic.APIError as e:
        print(f"Warning: branch naming failed: {e}", file=sys.stderr)
        return ""

    if not response.content:
        return ""
    return _sanitize_branch_name(response.content[0].text)


def _sanitize_branch_name(text: str) -> str:
    """Reduce a model reply to a safe kebab-case name."""
    lines = text.strip().splitlines()
    if not lines:
        return ""
    name = _NON_SLUG.sub("-", lines[0].strip().strip("`'\"").lower()).strip("-")
    return name[:_MAX_BRANCH_LENGTH].rstrip("-")
