"""
ⒸAngelaMos | 2026
llm/prompts.py
"""

DEFAULT_DIFF_LIMIT = 3000

COMMIT_MESSAGE_INSTRUCTION = (
    "Generate a very short (one-line, imperative tense, <=50 chars) "
    "git commit message summarising the changes below:"
)


def build_commit_prompt(diff: str, limit: int = DEFAULT_DIFF_LIMIT) -> str:
    """
    Commit message request followed by the head of the diff
    """
    return f"{COMMIT_MESSAGE_INSTRUCTION}\n\n{diff[:limit]}"
