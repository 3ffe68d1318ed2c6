"""
Prompt loading utilities.

Prompts live as markdown files under ``templates/<category>/<name>.md``.
"""

from functools import lru_cache
from pathlib import Path


PROMPTS_DIR = Path(__file__).parent / "templates"


@lru_cache(maxsize=None)
def load_prompt(name: str, category: str = "analysis") -> str:
    """
    Load a prompt template from a markdown file.

    Args:
        name: The prompt name (e.g., "system")
        category: The prompt category directory

    Returns:
        The prompt template as a string

    Raises:
        FileNotFoundError: If the prompt file doesn't exist
    """
    prompt_path = PROMPTS_DIR / category / f"{name}.md"

    if not prompt_path.exists():
        raise FileNotFoundError(
            f"Prompt file not found: {prompt_path}. "
            f"Expected prompt '{name}' in category '{category}'."
        )

    return prompt_path.read_text(encoding="utf-8")


def get_system_prompt() -> str:
    """The fixed system instruction for treatment analysis."""
    return load_prompt("system", "analysis")
