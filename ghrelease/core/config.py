"""Release step configuration.

The step is configured from a TOML file with a single ``[release]`` table,
optionally overridden by CLI flags::

    [release]
    api_url = "https://github.example.com/api/v3"   # omit for github.com
    user = "${GITHUB_USER}"
    password = "${GITHUB_PASSWORD}"
    owner = "Ontotext-AD"
    repository = "release-test"
    tag = "${RELEASE_VERSION}"
    branch = "master"
    release_notes_file = "RELEASE-NOTES.md"

Values are kept literal here; macros are expanded per build by
:mod:`ghrelease.release.resolver`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_raw_str, get_table

__all__ = [
    "StepConfig",
    "ConfigError",
    "DEFAULT_TICKET_URL",
    "fix_empty_and_trim",
    "load_config",
    "merge_overrides",
]

DEFAULT_TICKET_URL = "https://issues.example.com/browse/"


def fix_empty_and_trim(value: str | None) -> str | None:
    """Trim ``value``; blank strings become None."""
    if value is None:
        return None
    s = value.strip()
    return s or None


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the config file cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class StepConfig:
    """Literal (unexpanded) configuration of one release step.

    Use :meth:`create` so that owner, repository, tag, branch and notes path
    are normalized the same way regardless of where they come from.
    Credentials and the API URL are kept verbatim.
    """

    api_url: str | None = None
    user: str | None = None
    password: str | None = None
    owner: str | None = None
    repository: str | None = None
    tag: str | None = None
    branch: str | None = None
    release_notes_file: str | None = None
    ticket_url: str = DEFAULT_TICKET_URL

    @classmethod
    def create(
        cls,
        *,
        api_url: str | None = None,
        user: str | None = None,
        password: str | None = None,
        owner: str | None = None,
        repository: str | None = None,
        tag: str | None = None,
        branch: str | None = None,
        release_notes_file: str | None = None,
        ticket_url: str | None = None,
    ) -> StepConfig:
        return cls(
            api_url=api_url,
            user=user,
            password=password,
            owner=fix_empty_and_trim(owner),
            repository=fix_empty_and_trim(repository),
            tag=fix_empty_and_trim(tag),
            branch=fix_empty_and_trim(branch),
            release_notes_file=fix_empty_and_trim(release_notes_file),
            ticket_url=fix_empty_and_trim(ticket_url) or DEFAULT_TICKET_URL,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> StepConfig:
        """Create a StepConfig from a parsed TOML document."""
        release: StrDict = get_table(data, "release") or {}
        return cls.create(
            api_url=get_raw_str(release, "api_url"),
            user=get_raw_str(release, "user"),
            password=get_raw_str(release, "password"),
            owner=get_raw_str(release, "owner"),
            repository=get_raw_str(release, "repository"),
            tag=get_raw_str(release, "tag"),
            branch=get_raw_str(release, "branch"),
            release_notes_file=get_raw_str(release, "release_notes_file"),
            ticket_url=get_raw_str(release, "ticket_url"),
        )


def merge_overrides(config: StepConfig, **overrides: str | None) -> StepConfig:
    """Return ``config`` with every non-None override applied.

    Raises:
        TypeError: If an override names an unknown field.
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    if not values:
        return config
    merged = replace(config, **values)
    return StepConfig.create(
        api_url=merged.api_url,
        user=merged.user,
        password=merged.password,
        owner=merged.owner,
        repository=merged.repository,
        tag=merged.tag,
        branch=merged.branch,
        release_notes_file=merged.release_notes_file,
        ticket_url=merged.ticket_url,
    )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except (UnicodeDecodeError, OSError) as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[StepConfig, ConfigError]:
    """Load the release step configuration from a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Ok(StepConfig) on success, Err(ConfigError) on failure.
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    data = result.value
    if "release" in data and get_table(data, "release") is None:
        return Err(ConfigError("[release] must be a TOML table", path=path))

    return Ok(StepConfig.from_dict(data))
