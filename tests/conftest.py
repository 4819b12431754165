"""In-memory stand-ins for the assistant API, the E2B sandbox and the terminal."""

import json
import posixpath
from types import SimpleNamespace

import pytest

from aidev.core import Session
from aidev.sandbox import RemoteSandbox


# =============================================================================
# E2B sandbox
# =============================================================================


class FakeCommands:
    """Records commands; results are scripted by substring."""

    def __init__(self):
        self.calls = []
        self.results = {}

    def fail(self, fragment, exit_code=1, stderr="boom", stdout=""):
        self.results[fragment] = (exit_code, stdout, stderr)

    def succeed(self, fragment, stdout=""):
        self.results[fragment] = (0, stdout, "")

    def run(self, command, cwd=None, envs=None, timeout=None, on_stdout=None, on_stderr=None):
        self.calls.append(SimpleNamespace(command=command, cwd=cwd, envs=envs))
        exit_code, stdout, stderr = 0, "", ""
        for fragment, result in self.results.items():
            if fragment in command:
                exit_code, stdout, stderr = result
                break
        if stdout and on_stdout:
            on_stdout(stdout)
        if stderr and on_stderr:
            on_stderr(stderr)
        return SimpleNamespace(exit_code=exit_code, stdout=stdout, stderr=stderr)

    @property
    def commands(self):
        return [call.command for call in self.calls]


class FakeFiles:
    """A tiny dict-backed filesystem."""

    def __init__(self):
        self.contents = {}
        self.dirs = {"/", "/home", "/home/user", "/home/user/repo"}

    def read(self, path):
        if path not in self.contents:
            raise FileNotFoundError(f"No such file: {path}")
        return self.contents[path]

    def write(self, path, data):
        self.contents[path] = data
        return SimpleNamespace(path=path)

    def make_dir(self, path):
        if path in self.dirs:
            return False
        while path not in self.dirs:
            self.dirs.add(path)
            path = posixpath.dirname(path)
        return True

    def list(self, path):
        if path not in self.dirs:
            raise FileNotFoundError(f"No such directory: {path}")
        children = {
            p for p in list(self.contents) + list(self.dirs) if p != path and posixpath.dirname(p) == path
        }
        return [SimpleNamespace(name=posixpath.basename(p)) for p in sorted(children)]


class FakeE2BSandbox:
    def __init__(self):
        self.sandbox_id = "sbx_test"
        self.commands = FakeCommands()
        self.files = FakeFiles()
        self.kill_count = 0

    def kill(self):
        self.kill_count += 1


@pytest.fixture
def e2b():
    return FakeE2BSandbox()


@pytest.fixture
def sandbox(e2b):
    remote = RemoteSandbox(e2b)
    remote.register_defaults()
    return remote


# =============================================================================
# Assistant API
# =============================================================================


def make_call(call_id, name, arguments=None, raw=None):
    """Build an API-shaped tool call."""
    if raw is None:
        raw = json.dumps(arguments or {})
    return SimpleNamespace(id=call_id, type="function", function=SimpleNamespace(name=name, arguments=raw))


def make_run(run_id, status, tool_calls=None):
    """Build an API-shaped run."""
    required = None
    if tool_calls is not None:
        required = SimpleNamespace(
            type="submit_tool_outputs",
            submit_tool_outputs=SimpleNamespace(tool_calls=tool_calls),
        )
    return SimpleNamespace(id=run_id, status=status, required_action=required)


class FakeAssistantClient:
    """Scripted replacement for AssistantClient.

    Each script is the sequence of states one run goes through: the first is
    returned by create_run, the rest by successive retrieve_run calls. The
    last state repeats once the script is exhausted.
    """

    def __init__(self, scripts, replies=(), tools=()):
        self.scripts = [list(script) for script in scripts]
        self.replies = list(replies)
        self.tools = list(tools)
        self.calls = []
        self.submitted = []
        self.user_messages = []
        self.created_runs = 0
        self.retrievals = 0
        self._current = []

    def get_assistant(self, assistant_id):
        self.calls.append("get_assistant")
        tools = [
            SimpleNamespace(type="function", function=SimpleNamespace(name=name)) for name in self.tools
        ]
        return SimpleNamespace(id=assistant_id, tools=tools)

    def create_thread(self, session):
        self.calls.append("create_thread")
        self.seed = session.seed_message()
        return SimpleNamespace(id="thread_1")

    def create_run(self, thread_id, assistant_id):
        self.calls.append("create_run")
        assert thread_id == "thread_1"
        self.created_runs += 1
        self._current = self.scripts.pop(0)
        return self._current[0]

    def retrieve_run(self, thread_id, run_id):
        self.calls.append("retrieve_run")
        assert thread_id == "thread_1"
        self.retrievals += 1
        if len(self._current) > 1:
            self._current.pop(0)
        return self._current[0]

    def submit_tool_outputs(self, thread_id, run_id, outputs):
        self.calls.append("submit_tool_outputs")
        self.submitted.append((run_id, list(outputs)))

    def latest_reply(self, thread_id):
        self.calls.append("latest_reply")
        return self.replies.pop(0) if self.replies else ""

    def add_user_message(self, thread_id, content):
        self.calls.append("add_user_message")
        self.user_messages.append((thread_id, content))


# =============================================================================
# Terminal
# =============================================================================


class FakePrompter:
    def __init__(self, responses=(), session=None):
        self.responses = list(responses)
        self.questions = []
        self.session = session or Session(repo_name="octo/repo", task="fix the off-by-one in parse()")

    def init_chat(self):
        return self.session

    def follow_up(self, question):
        self.questions.append(question)
        return self.responses.pop(0) if self.responses else "exit"


class FakeSpinner:
    def __init__(self):
        self.running = False
        self.starts = 0
        self.stops = 0

    def start(self):
        self.running = True
        self.starts += 1

    def stop(self):
        self.running = False
        self.stops += 1
