import json
import re

from typing import Dict, List, Tuple

from .llm import LLMClient
from .types import ProviderError, ScriptRequest


DIALECTS = {
    "bash": "Bash",
    "zsh": "Zsh",
    "sh": "POSIX sh",
    "powershell": "PowerShell",
    "batch": "Windows batch (cmd.exe)",
}

SYSTEM_PROMPT = """
You are a highly experienced system administrator and scripting expert.
Given a natural language task, write a {dialect} script that accomplishes it.

Your response must be a valid JSON object in the following format (with double quotes and no
trailing commas):
{{
    "script": "<the complete {dialect} script>",
    "explanation": "<a short, human-readable explanation of what the script does>"
}}

Rules for the script:
1.  It must be complete and runnable as-is for the {dialect} interpreter.
2.  Prefer safe, read-only operations; ask for confirmation inside the script before deleting data.
3.  Add brief comments for non-obvious steps.

Do not include markdown, code blocks, or anything outside the JSON object.
"""

_FENCE_RE = re.compile(r"```[\w+-]*[ \t]*\n(.*?)```", re.DOTALL)


def dialect_name(script_type: str) -> str:
    return DIALECTS.get(script_type, script_type)


def build_messages(request: ScriptRequest) -> List[Dict]:
    system_prompt = SYSTEM_PROMPT.format(dialect=dialect_name(request.script_type))
    user_task = (
        f"Write a {dialect_name(request.script_type)} script for this task: "
        f"{request.task_description}"
    )
    return [
        LLMClient.format_system_message(system_prompt),
        LLMClient.format_user_message(user_task),
    ]


def _load_json(text: str):
    """Returns the decoded reply, or None when the reply is not JSON at all."""
    candidate = text.strip()
    fenced = _FENCE_RE.fullmatch(candidate)
    if fenced:
        candidate = fenced.group(1).strip()

    try:
        return json.loads(candidate)
    except json.JSONDecodeError:
        return None


def parse_reply(text: str) -> Tuple[str, str]:
    """
    Splits a raw model reply into (script, explanation).

    Models do not always honour the JSON format we ask for, so three shapes are
    accepted, in order:
    1. A JSON object with a "script" key (optionally inside a code fence).
    2. Prose with a fenced code block: the block is the script, the rest is
       the explanation.
    3. Anything else that is not a JSON object: the whole reply is the script.

    A JSON object without a string "script" is rejected rather than shown as
    a script.
    """
    if not text or not text.strip():
        raise ProviderError("The provider returned an empty response.")

    data = _load_json(text)
    if isinstance(data, dict):
        if not isinstance(data.get("script"), str):
            raise ProviderError("The provider response is JSON but has no \"script\" field.")
        explanation = data.get("explanation") or ""
        parsed = (data["script"].strip(), str(explanation).strip())
    else:
        match = _FENCE_RE.search(text)
        if match:
            script = match.group(1).strip()
            explanation = (text[: match.start()] + text[match.end():]).strip()
            parsed = (script, explanation)
        else:
            parsed = (text.strip(), "")

    script, explanation = parsed
    if not script:
        raise ProviderError("The provider response did not contain a script.")
    return script, explanation
