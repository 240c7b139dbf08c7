"""Configuration management for notegraph.

This module contains all configurable constants for the graph engine.
Magic numbers are documented here rather than scattered throughout the codebase.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml


class ConfigurationError(Exception):
    """Raised when required configuration is missing."""

    pass


# Config file that points at a vault (searched upward from cwd, then in $HOME)
VAULT_CONFIG_FILENAME = ".notegraph.yaml"

# Maximum directories to walk up when looking for VAULT_CONFIG_FILENAME
MAX_CONFIG_SEARCH_DEPTH = 50


@dataclass
class VaultConfig:
    """Resolved vault location plus per-vault options."""

    vault_root: Path
    exclude: list[str] = field(default_factory=list)
    source_file: Path | None = None


def _read_config_file(config_file: Path) -> VaultConfig | None:
    try:
        data = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError):
        return None

    if not isinstance(data, dict) or "vault_path" not in data:
        return None

    vault_root = (config_file.parent / str(data["vault_path"])).expanduser().resolve()
    if not vault_root.is_dir():
        return None

    exclude = data.get("exclude") or []
    if not isinstance(exclude, list):
        exclude = [exclude]

    return VaultConfig(
        vault_root=vault_root,
        exclude=[str(pattern) for pattern in exclude],
        source_file=config_file,
    )


def _discover_config(start_dir: Path | None = None) -> VaultConfig | None:
    """Walk up from start_dir looking for a vault config file.

    Args:
        start_dir: Directory to start from (defaults to cwd).

    Returns:
        The first valid VaultConfig found, or None.
    """
    current = Path(start_dir or os.getcwd()).resolve()

    for _ in range(MAX_CONFIG_SEARCH_DEPTH):
        config_file = current / VAULT_CONFIG_FILENAME
        if config_file.exists():
            config = _read_config_file(config_file)
            if config is not None:
                return config

        parent = current.parent
        if parent == current:  # Reached filesystem root
            break
        current = parent

    home_config = Path.home() / VAULT_CONFIG_FILENAME
    if home_config.exists():
        return _read_config_file(home_config)

    return None


def load_vault_config(start_dir: Path | None = None) -> VaultConfig:
    """Resolve the vault to analyze.

    Discovery order:
    1. NOTEGRAPH_VAULT_ROOT environment variable (explicit override)
    2. Walk up from cwd looking for .notegraph.yaml with a vault_path field
    3. ~/.notegraph.yaml
    4. Error with helpful message

    Raises:
        ConfigurationError: If no vault can be found.
    """
    root = os.environ.get("NOTEGRAPH_VAULT_ROOT")
    if root:
        vault_root = Path(root).expanduser()
        if not vault_root.is_dir():
            raise ConfigurationError(f"NOTEGRAPH_VAULT_ROOT is not a directory: {root}")
        return VaultConfig(vault_root=vault_root)

    config = _discover_config(start_dir)
    if config is not None:
        return config

    raise ConfigurationError(
        "No vault configured. Options:\n"
        "  1. Set NOTEGRAPH_VAULT_ROOT to a directory of markdown notes\n"
        f"  2. Create {VAULT_CONFIG_FILENAME} with 'vault_path: <dir>' in this project\n"
        f"  3. Create ~/{VAULT_CONFIG_FILENAME} for a personal default"
    )


def get_vault_root() -> Path:
    """Get the root directory of the configured vault."""
    return load_vault_config().vault_root


# =============================================================================
# Note Identifiers
# =============================================================================

# Conventional note-file suffix appended to bare link targets
NOTE_SUFFIX = ".md"

# Folder reported for notes at the vault root (no folder node is created for it)
ROOT_FOLDER = "."

# Id prefixes that keep synthetic nodes from colliding with note paths
TAG_NODE_PREFIX = "tag:"
FOLDER_NODE_PREFIX = "folder:"


# =============================================================================
# Traversal
# =============================================================================

# Default hop count for related-note discovery
DEFAULT_RELATED_DEPTH = 2

# Upper bound accepted by the CLI --depth option
MAX_RELATED_DEPTH = 10


# =============================================================================
# Analysis
# =============================================================================

# Number of entries kept in GraphAnalysis.top_connected
TOP_CONNECTED_LIMIT = 10

# Default number of dead ends reported
DEFAULT_DEAD_END_LIMIT = 10


# =============================================================================
# Link Suggestions
# =============================================================================

# Default number of suggestions returned
DEFAULT_SUGGESTION_LIMIT = 5

# Score added per tag shared between the source note and a candidate
SHARED_TAG_WEIGHT = 10

# Score added per candidate title word that also appears in the source title
SHARED_TITLE_WORD_WEIGHT = 5

# Title words must be longer than this to count ("the", "and", "of" never match)
MIN_TITLE_WORD_LENGTH = 3

# Flat bonus when the candidate lives in the same folder as the source note
SAME_FOLDER_WEIGHT = 3
