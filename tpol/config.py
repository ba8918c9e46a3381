import json
import os

ESCAPE_CHARACTER = "!"
EXIT_COMMAND = "exit"

CONFIG_DIR_NAME = ".tpol"
LOGS_DIR_NAME = "logs"
HISTORY_DIR_NAME = "history"
PROMPTS_FILENAME = "prompts.json"

MAX_HISTORY = 1000
DEFAULT_PROMPT_TIMEOUT = 2.0

# Commands that get a prompt generator even without a prompts.json entry
DEFAULT_PROMPTS = {
    "git": "__git_ps1",
}


def config_dir():
    """Per-user configuration directory (TPOL_HOME overrides ~/.tpol)"""
    override = os.getenv("TPOL_HOME")
    if override:
        return os.path.expanduser(override)
    return os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME)


def history_dir():
    return os.path.join(config_dir(), HISTORY_DIR_NAME)


def logs_dir():
    return os.path.join(config_dir(), LOGS_DIR_NAME)


def prompts_path():
    return os.path.join(config_dir(), PROMPTS_FILENAME)


def history_path(command):
    """History file for one wrapped command"""
    return os.path.join(history_dir(), command)


def prompt_timeout():
    """
    Seconds to wait for a prompt generator.
    Returns None when TPOL_PROMPT_TIMEOUT is 0 (no bound).
    """
    raw = os.getenv("TPOL_PROMPT_TIMEOUT")
    if raw is None:
        return DEFAULT_PROMPT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_PROMPT_TIMEOUT
    return value if value > 0 else None


def read_prompt_config(path=None):
    """
    Read prompts.json: {command: invocation}.
    Missing, unreadable or malformed files give an empty mapping.
    """
    path = path or prompts_path()
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return {}

    if not isinstance(data, dict):
        return {}
    if not all(isinstance(k, str) and isinstance(v, str) for k, v in data.items()):
        return {}
    return data


def load_prompt_mapping(path=None):
    """Prompt mapping with the built-in defaults filled in"""
    mapping = read_prompt_config(path)
    for command, invocation in DEFAULT_PROMPTS.items():
        mapping.setdefault(command, invocation)
    return mapping
