"""Function-tool definitions for provisioning the assistant."""

from __future__ import annotations

from aidev.actions import ActionName

ASSISTANT_NAME = "AI Developer"


def _string(description: str) -> dict:
    return {"type": "string", "description": description}


TOOL_PARAMETERS: dict[ActionName, tuple[str, dict[str, dict], list[str]]] = {
    ActionName.LIST_FILES: (
        "List the files and directories in a directory of the repository.",
        {"path": _string("Directory path relative to the repository root.")},
        ["path"],
    ),
    ActionName.READ_FILE: (
        "Read the contents of a file in the repository.",
        {"path": _string("File path relative to the repository root.")},
        ["path"],
    ),
    ActionName.SAVE_CODE_TO_FILE: (
        "Save code to a file, replacing any existing content.",
        {
            "path": _string("File path relative to the repository root."),
            "content": _string("The complete new contents of the file."),
        },
        ["path", "content"],
    ),
    ActionName.MAKE_DIR: (
        "Create a directory, including any missing parent directories.",
        {"path": _string("Directory path relative to the repository root.")},
        ["path"],
    ),
    ActionName.MAKE_COMMIT: (
        "Stage every change in the repository and commit it.",
        {"message": _string("The commit message.")},
        ["message"],
    ),
    ActionName.MAKE_PULL_REQUEST: (
        "Push the committed work to a branch and open a pull request.",
        {
            "title": _string("Pull request title."),
            "body": _string("Pull request description."),
            "branch": _string("Name of the branch to push."),
        },
        ["title", "body", "branch"],
    ),
}


def tool_definitions() -> list[dict]:
    """Function tools for every action, in ActionName order."""
    tools = []
    for name in ActionName:
        description, properties, required = TOOL_PARAMETERS[name]
        tools.append(
            {
                "type": "function",
                "function": {
                    "name": name.value,
                    "description": description,
                    "parameters": {
                        "type": "object",
                        "properties": properties,
                        "required": required,
                    },
                },
            }
        )
    return tools


DEFAULT_INSTRUCTIONS = """You are an AI developer. You work on a GitHub repository that is already cloned into a sandbox.

When the user gives you a task:
1. Explore the repository with listFiles and readFile before changing anything
2. Plan the change and explain the plan briefly
3. Write complete file contents with saveCodeToFile (create directories with makeDir first)
4. Commit with makeCommit using a clear message
5. Open a pull request with makePullRequest when the work is ready

All paths are relative to the repository root.
If a tool returns a message starting with "Error:", read it and try a different approach.
When you finish a step that needs the user's input, stop and ask.
"""
