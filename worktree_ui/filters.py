"""Filters for deciding which history prompts are worth showing as labels."""

# Prompts shorter than this are not meaningful enough to name a worktree.
MIN_PROMPT_LENGTH = 10

# Command-like inputs, matched as the whole prompt or as its first word
SKIP_PREFIXES = ("exit", "quit", "q", "go", "yes", "no", "y", "n")


def is_skippable(display: str) -> bool:
    """Check if a prompt is too short or looks like a command."""
    trimmed = display.strip()
    if len(trimmed) < MIN_PROMPT_LENGTH:
        return True

    # Slash commands (e.g., /commit, /review-pr 123)
    if trimmed.startswith("/"):
        return True

    lower = trimmed.lower()
    for prefix in SKIP_PREFIXES:
        if lower == prefix or lower.startswith(prefix + " "):
            return True

    return False
