"""Scenario configuration: the seed state of an emulator run."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from hubsim.api.auth import DEFAULT_REJECTED_TOKENS
from hubsim.store import DEFAULT_AUTHENTICATED_USER, Column, Comment, Issue, IssueState

if TYPE_CHECKING:
    from hubsim.api.auth import AuthGate
    from hubsim.store import StateStore

logger = logging.getLogger("hubsim.config")


class ConfigError(Exception):
    """Raised when a scenario file is missing or invalid."""


@dataclass
class AuthConfig:
    """Auth gate settings."""

    expected_token: str | None = None
    reject_invalid: bool = False
    rejected_tokens: tuple[str, ...] = DEFAULT_REJECTED_TOKENS


@dataclass
class ServerConfig:
    """Where ``hubsim serve`` listens."""

    host: str = "127.0.0.1"
    port: int = 0
    log_level: str = "warning"


@dataclass
class CommentConfig:
    """A seeded comment. ``id`` is assigned on apply when omitted."""

    body: str
    author: str = DEFAULT_AUTHENTICATED_USER
    id: int | None = None


@dataclass
class ProjectConfig:
    """A seeded project board.

    ``items`` maps issue numbers to the id of the column they sit in.
    """

    id: int
    title: str = ""
    columns: list[Column] = field(default_factory=list)
    items: dict[int, str] = field(default_factory=dict)


@dataclass
class ScenarioConfig:
    """Everything needed to put an emulator into a known state."""

    auth: AuthConfig = field(default_factory=AuthConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    authenticated_user: str = DEFAULT_AUTHENTICATED_USER
    issues: list[Issue] = field(default_factory=list)
    comments: dict[int, list[CommentConfig]] = field(default_factory=dict)
    projects: list[ProjectConfig] = field(default_factory=list)
    invalid_projects: list[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScenarioConfig:
        """Create a scenario from a dictionary.

        Args:
            data: Scenario dictionary, usually from YAML. Every key is optional.

        Returns:
            Parsed scenario.

        Raises:
            ConfigError: If a section has the wrong shape or refers to
                something that is not defined.
        """
        auth_data = _mapping(data.get("auth"), "auth")
        auth = AuthConfig(
            expected_token=_optional_str(auth_data.get("expected_token"), "auth.expected_token"),
            reject_invalid=bool(auth_data.get("reject_invalid", False)),
            rejected_tokens=tuple(
                str(t)
                for t in _sequence(
                    auth_data.get("rejected_tokens", DEFAULT_REJECTED_TOKENS),
                    "auth.rejected_tokens",
                )
            ),
        )

        server_data = _mapping(data.get("server"), "server")
        server = ServerConfig(
            host=str(server_data.get("host", "127.0.0.1")),
            port=_int(server_data.get("port", 0), "server.port"),
            log_level=str(server_data.get("log_level", "warning")),
        )

        issues = [_parse_issue(i, n) for n, i in enumerate(_sequence(data.get("issues"), "issues"))]
        numbers = [issue.number for issue in issues]
        duplicates = sorted({n for n in numbers if numbers.count(n) > 1})
        if duplicates:
            raise ConfigError(f"Duplicate issue numbers: {', '.join(map(str, duplicates))}")

        comments: dict[int, list[CommentConfig]] = {}
        for key, entries in _mapping(data.get("comments"), "comments").items():
            number = _int(key, "comments key")
            if number not in numbers:
                raise ConfigError(f"Comments given for undefined issue #{number}")
            comments[number] = [
                _parse_comment(c, f"comments.{number}")
                for c in _sequence(entries, f"comments.{number}")
            ]
        explicit_ids = [c.id for entries in comments.values() for c in entries if c.id is not None]
        bad_ids = sorted({i for i in explicit_ids if i < 1 or explicit_ids.count(i) > 1})
        if bad_ids:
            raise ConfigError(
                "Comment ids must be positive and unique, got: "
                f"{', '.join(map(str, bad_ids))}"
            )

        projects = [
            _parse_project(p, n) for n, p in enumerate(_sequence(data.get("projects"), "projects"))
        ]
        project_ids = [p.id for p in projects]
        if len(project_ids) != len(set(project_ids)):
            raise ConfigError("Duplicate project ids")

        return cls(
            auth=auth,
            server=server,
            authenticated_user=str(data.get("authenticated_user", DEFAULT_AUTHENTICATED_USER)),
            issues=issues,
            comments=comments,
            projects=projects,
            invalid_projects=[
                _int(p, "invalid_projects")
                for p in _sequence(data.get("invalid_projects"), "invalid_projects")
            ],
        )

    def apply(self, store: StateStore, auth: AuthGate | None = None) -> None:
        """Reset ``store`` (and ``auth``, if given) to this scenario's state."""
        store.reset()
        store.authenticated_user = self.authenticated_user
        store.set_issues(self.issues)

        explicit = [
            c.id for entries in self.comments.values() for c in entries if c.id is not None
        ]
        next_id = max(explicit, default=0) + 1
        for number, entries in self.comments.items():
            seeded = []
            for entry in entries:
                comment_id = entry.id
                if comment_id is None:
                    comment_id = next_id
                    next_id += 1
                seeded.append(Comment(id=comment_id, author=entry.author, body=entry.body))
            store.set_comments(number, seeded)

        for project in self.projects:
            store.set_project(project.id, project.title, project.columns)
            for issue_number, column_id in project.items.items():
                store.set_project_item(project.id, issue_number, column_id)
        for project_id in self.invalid_projects:
            store.mark_project_invalid(project_id)

        if auth is not None:
            auth.reset()
            auth.configure(
                expected_token=self.auth.expected_token or "",
                reject_invalid=self.auth.reject_invalid,
                rejected_tokens=self.auth.rejected_tokens,
            )

        logger.info(
            "Applied scenario: %d issue(s), %d project(s)", len(self.issues), len(self.projects)
        )


def load_scenario(path: Path | str) -> ScenarioConfig:
    """Load a scenario from a YAML file.

    Args:
        path: Path to the scenario file.

    Returns:
        Parsed scenario.

    Raises:
        ConfigError: If the file doesn't exist or is invalid.
    """
    path = Path(path)

    if not path.exists():
        raise ConfigError(f"Scenario file not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Scenario must be a YAML mapping, got {type(data).__name__}")

    return ScenarioConfig.from_dict(data)


# --- Section parsers ---


def _parse_issue(data: Any, index: int) -> Issue:
    where = f"issues[{index}]"
    entry = _mapping(data, where)
    if "number" not in entry:
        raise ConfigError(f"Missing required field: {where}.number")
    number = _int(entry["number"], f"{where}.number")
    if number < 1:
        raise ConfigError(f"{where}.number must be positive, got {number}")

    state = str(entry.get("state", IssueState.OPEN.value))
    if state not in (IssueState.OPEN.value, IssueState.CLOSED.value):
        raise ConfigError(f"{where}.state must be 'open' or 'closed', got {state!r}")

    return Issue(
        number=number,
        title=str(entry.get("title", "")),
        body=str(entry.get("body") or ""),
        state=state,
        labels=[str(label) for label in _sequence(entry.get("labels"), f"{where}.labels")],
        assignee=_optional_str(entry.get("assignee"), f"{where}.assignee"),
    )


def _parse_comment(data: Any, where: str) -> CommentConfig:
    if isinstance(data, str):
        return CommentConfig(body=data)
    entry = _mapping(data, where)
    comment_id = entry.get("id")
    return CommentConfig(
        body=str(entry.get("body", "")),
        author=str(entry.get("author", DEFAULT_AUTHENTICATED_USER)),
        id=_int(comment_id, f"{where}.id") if comment_id is not None else None,
    )


def _parse_project(data: Any, index: int) -> ProjectConfig:
    where = f"projects[{index}]"
    entry = _mapping(data, where)
    if "id" not in entry:
        raise ConfigError(f"Missing required field: {where}.id")

    columns = []
    for n, column in enumerate(_sequence(entry.get("columns"), f"{where}.columns")):
        column_data = _mapping(column, f"{where}.columns[{n}]")
        missing = [f for f in ("id", "name") if f not in column_data]
        if missing:
            raise ConfigError(
                f"Missing required fields in {where}.columns[{n}]: {', '.join(missing)}"
            )
        columns.append(Column(id=str(column_data["id"]), name=str(column_data["name"])))

    column_ids = {c.id for c in columns}
    if len(column_ids) != len(columns):
        raise ConfigError(f"Duplicate column ids in {where}")

    items: dict[int, str] = {}
    for n, item in enumerate(_sequence(entry.get("items"), f"{where}.items")):
        item_data = _mapping(item, f"{where}.items[{n}]")
        issue_number = _int(item_data.get("issue"), f"{where}.items[{n}].issue")
        column_id = str(item_data.get("column", ""))
        if column_id not in column_ids:
            raise ConfigError(f"{where}.items[{n}] refers to unknown column {column_id!r}")
        items[issue_number] = column_id

    return ProjectConfig(
        id=_int(entry["id"], f"{where}.id"),
        title=str(entry.get("title", "")),
        columns=columns,
        items=items,
    )


def _mapping(value: Any, where: str) -> dict[Any, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{where} must be a mapping, got {type(value).__name__}")
    return value


def _sequence(value: Any, where: str) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ConfigError(f"{where} must be a list, got {type(value).__name__}")
    return list(value)


def _int(value: Any, where: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{where} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{where} must be an integer, got {value!r}") from e


def _optional_str(value: Any, where: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, (str, int)):
        raise ConfigError(f"{where} must be a string, got {type(value).__name__}")
    return str(value)
