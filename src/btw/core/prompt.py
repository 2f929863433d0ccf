SESSION_CONTEXT_HEADER = "# System and Session Context"
SESSION_CONTEXT_INTRO = (
    "Please account for the following Python session and system settings "
    "in all responses."
)

TOOLS_HEADER = "# Tools"
TOOLS_INTRO = (
    "You have access to tools that help you interact with the user's Python "
    "session and workspace. Use these tools when they are helpful and "
    "appropriate to complete the user's request. These tools are available to "
    "augment your ability to help the user, but you are smart and capable and "
    "can answer many things on your own. It is okay to answer the user "
    "without relying on these tools."
)

PROJECT_CONTEXT_HEADER = "# Project Context"

SECTION_SEPARATOR = "---\n"


def build_system_prompt(
    platform: str,
    project_prompt: str | None = None,
    existing_prompt: str | None = None,
    with_tools: bool = True,
) -> str:
    """Assemble the btw system prompt, followed by the client's own prompt."""
    parts = [SESSION_CONTEXT_HEADER, SESSION_CONTEXT_INTRO, "", platform, ""]
    if with_tools:
        parts += [TOOLS_HEADER, "", TOOLS_INTRO, ""]
    if project_prompt:
        parts += [PROJECT_CONTEXT_HEADER, "", project_prompt.strip(), ""]
    parts.append(SECTION_SEPARATOR)
    if existing_prompt:
        parts.append(existing_prompt)
    return "\n".join(parts)
