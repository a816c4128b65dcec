"""Default configuration values for command-refgen."""

from pathlib import Path

# Project files that mark an analyzable project
DEFAULT_PROJECT_PATTERNS = [
    "**/pyproject.toml",
]

# Base classes whose presence marks a class as a command module
DEFAULT_MARKER_BASE_TYPES = [
    "BaseCommandModule",
    "ApplicationCommandModule",
]

# Path fragment of the checkout inside the GitHub Actions container
DEFAULT_WORKSPACE_MARKER = "github/workspace"

# Output documents, written into the --dir directory
DEFAULT_METRICS_FILE_NAME = "CODE_METRICS.md"
DEFAULT_COMMANDS_FILE_NAME = "COMMAND_REFERENCE.md"

# Optional YAML overrides looked up in the --dir directory
DEFAULT_CONFIG_FILE_NAME = ".command-refgen.yaml"

# Decorator names recognized by the command extractor, keyed by meaning.
# Matching uses the last dotted segment (``commands.command`` -> ``command``).
DEFAULT_DECORATOR_NAMES: dict[str, list[str]] = {
    "command": ["Command", "command"],
    "slash_command": ["SlashCommand", "slash_command"],
    "description": ["Description", "description"],
    "aliases": ["Aliases", "aliases"],
    "remaining_text": ["RemainingText", "remaining_text"],
}

# Suffix identifying a conventional leading context parameter
CONTEXT_TYPE_SUFFIX = "Context"

# Display name of the synthetic type holding module-level functions/variables
SYNTHETIC_TYPE_NAME = "<module>"

# Directories never scanned for source modules
DEFAULT_IGNORE_PATTERNS = [
    # Version control
    ".git",
    ".hg",
    ".svn",
    # Python caches and environments
    "__pycache__",
    ".hypothesis",
    ".mypy_cache",
    ".nox",
    ".pytest_cache",
    ".ruff_cache",
    ".tox",
    ".venv",
    "venv",
    # JavaScript/Node.js
    "node_modules",
    # Build outputs
    "_build",
    "build",
    "dist",
    "htmlcov",
    "site",
    # Generic caches
    ".cache",
    # IDEs and editors
    ".idea",
    ".vscode",
    # Build artifacts and packages
    "*.egg-info",
]

# Metric glossary rendered at the end of the metrics report
METRIC_DEFINITIONS = [
    (
        "Maintainability index",
        "Measures ease of code maintenance. 🧽 ⬆️ Higher values are better.",
    ),
    (
        "Cyclomatic complexity",
        "Measures the number of branches. 🌱 ⬇️ Lower values are better.",
    ),
    (
        "Depth of inheritance",
        "Measures length of object inheritance hierarchy. 🇿 ⬇️ Lower values are better.",
    ),
    (
        "Class coupling",
        "Measures the number of classes that are referenced. 🇨 🇨 ⬇️ Lower values are better.",
    ),
    (
        "Lines of source code",
        "Exact number of lines of source code. 🇱 🇴 🇨 ⬇️ Lower values are better.",
    ),
    (
        "Lines of executable code",
        "Approximates the lines of executable code. 🇱 🇴 🇪 🇨 ⬇️ Lower values are better.",
    ),
]


def get_default_config_path(directory: Path) -> Path:
    """Get the default YAML configuration path for a run directory."""
    return directory / DEFAULT_CONFIG_FILE_NAME
