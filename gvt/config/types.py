"""Configuration schemas for gvt.

Defines dataclasses for all configuration structures.
"""

from __future__ import annotations

from dataclasses import dataclass, field


DEFAULT_CONTROL_DIR = ".gvt"


@dataclass
class HistoryConfig:
    """Settings for the history command."""
    default_limit: int | None = None  # None shows every version

    @classmethod
    def from_dict(cls, data: dict) -> HistoryConfig:
        """Create HistoryConfig from dictionary."""
        limit = data.get("defaultLimit")
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            limit = None
        return cls(default_limit=limit)


@dataclass
class MessageTemplates:
    """Default version messages used when the user supplies none.

    Each template is formatted with ``file`` set to the tracked path.
    """
    add: str = "File added successfully. File: {file}"
    detach: str = "File detached successfully. File: {file}"
    commit: str = "File committed successfully. File: {file}"

    @classmethod
    def from_dict(cls, data: dict) -> MessageTemplates:
        """Create MessageTemplates from dictionary."""
        defaults = cls()
        return cls(
            add=_template(data.get("add"), defaults.add),
            detach=_template(data.get("detach"), defaults.detach),
            commit=_template(data.get("commit"), defaults.commit),
        )

    def render(self, operation: str, file_name: str) -> str:
        """Render the default message for ``operation`` on ``file_name``."""
        template = getattr(self, operation)
        try:
            return template.format(file=file_name)
        except (KeyError, IndexError, ValueError):
            # Broken user template; fall back to the built-in sentence
            return getattr(MessageTemplates(), operation).format(file=file_name)


def _template(val: object, default: str) -> str:
    if isinstance(val, str) and val.strip():
        return val
    return default


@dataclass
class GvtConfig:
    """Main gvt configuration."""
    control_dir: str = DEFAULT_CONTROL_DIR
    history: HistoryConfig = field(default_factory=HistoryConfig)
    messages: MessageTemplates = field(default_factory=MessageTemplates)

    @classmethod
    def from_dict(cls, data: dict) -> GvtConfig:
        """Create GvtConfig from dictionary."""
        control_dir = data.get("controlDir", DEFAULT_CONTROL_DIR)
        if not _is_plain_name(control_dir):
            control_dir = DEFAULT_CONTROL_DIR

        history_data = data.get("history", {})
        messages_data = data.get("messages", {})

        return cls(
            control_dir=control_dir,
            history=HistoryConfig.from_dict(history_data if isinstance(history_data, dict) else {}),
            messages=MessageTemplates.from_dict(messages_data if isinstance(messages_data, dict) else {}),
        )


def _is_plain_name(val: object) -> bool:
    """Control dir must be a single path component inside the working directory."""
    if not isinstance(val, str) or not val.strip():
        return False
    return "/" not in val and "\\" not in val and val not in (".", "..")
