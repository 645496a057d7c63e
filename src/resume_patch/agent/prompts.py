import json
from typing import Any

_PATCH_REFERENCE = """    <JsonPatchRules>
        Use the `patch_resume` tool for every change. Common operations:

          Change name:            {"op":"replace", "path":"/basics/name", "value":"Jane Doe"}
          Update headline:        {"op":"replace", "path":"/basics/headline", "value":"Senior Engineer"}
          Replace summary:        {"op":"replace", "path":"/summary/content", "value":"<p>Experienced...</p>"}
          Add experience:         {"op":"add", "path":"/sections/experience/items/-", "value":{...full item}}
          Remove skill 2:         {"op":"remove", "path":"/sections/skills/items/2"}
          Update a field:         {"op":"replace", "path":"/sections/experience/items/0/company", "value":"New Corp"}
          Change template:        {"op":"replace", "path":"/metadata/template", "value":"bronzor"}
          Change primary color:   {"op":"replace", "path":"/metadata/design/colors/primary", "value":"rgba(37, 99, 235, 1)"}
          Hide a section:         {"op":"replace", "path":"/sections/interests/hidden", "value":true}

        **Key rule: "/-" means APPEND. Never replace a whole items array to add one item.**

        - New items need an `id` that is unique within their section.
        - HTML fields (`description`, `summary.content`) use <p>, <ul>/<li>, <strong>, <em>.
        - Every `website` field is an object: {"url": "...", "label": "..."}.
        - Strings stay strings and numbers stay numbers; the schema does not convert types.
    </JsonPatchRules>"""

_CONSTRAINTS = """    <OperationalConstraints>
        - **Minimal batches:** Send only the operations the request needs, in one `patch_resume` call when possible.
        - **Recon before destructive writes:** Use `read_resume` to check indexes and ids before a remove, replace or move on an array item.
        - **All or nothing:** A rejected batch changes nothing. Read the error (it names the operation index, path and reason), fix the batch and retry.
        - **Do not invent facts:** Only add content the user gave you or explicitly asked you to write.
        - **Finish in text:** When the edit is done, answer with a short summary of what changed and no tool calls.
    </OperationalConstraints>"""


def build_system_prompt(resume: dict[str, Any]) -> str:
    """
    Build the system prompt for the editing agent.

    Args:
        resume: Current JSON tree of the resume.

    Returns:
        The complete system prompt.
    """
    resume_str = json.dumps(resume, indent=2, ensure_ascii=False)
    return f"""<SystemPrompt>
    <Role>
        You are an expert resume writer editing a structured resume document.
        You change the resume only through JSON Patch (RFC 6902) operations.
    </Role>

{_PATCH_REFERENCE}

{_CONSTRAINTS}

    <CurrentResume>
{resume_str}
    </CurrentResume>
</SystemPrompt>"""


def build_user_message(instruction: str) -> str:
    return f"""<EditRequest>
{instruction}
</EditRequest>"""
