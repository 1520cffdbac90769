"""Centralized constants for Skill-Forge.

Frontmatter keys, directory conventions and limits shared by the
parser, the linter and the scaffolder.
"""

# =============================================================================
# Directory conventions
# =============================================================================

# Host configuration directory name (user: ~/.claude, project: ./.claude)
HOST_DIR_NAME: str = ".claude"

# Sub-directories of a host directory holding each document kind
COMMANDS_DIR: str = "commands"
AGENTS_DIR: str = "agents"
SKILLS_DIR: str = "skills"

# Entry file of a skill directory
SKILL_ENTRY_FILE: str = "SKILL.md"

# Markdown extension for prompt documents
DOCUMENT_SUFFIX: str = ".md"

# Skill-Forge's own settings directory name
SETTINGS_DIR_NAME: str = ".skillforge"

# =============================================================================
# Frontmatter keys
# =============================================================================

COMMAND_KEYS: frozenset[str] = frozenset({
    "description",
    "argument-hint",
    "allowed-tools",
    "model",
    "permissionMode",
    "disable-model-invocation",
    "hooks",
})

AGENT_KEYS: frozenset[str] = frozenset({
    "name",
    "description",
    "tools",
    "model",
    "permissionMode",
    "color",
    "hooks",
})

SKILL_KEYS: frozenset[str] = frozenset({
    "name",
    "description",
    "allowed-tools",
    "model",
    "license",
    "version",
    "hooks",
})

# Keys whose values may be arbitrary structured YAML
STRUCTURED_KEYS: frozenset[str] = frozenset({"hooks"})

# Keys whose values are tool lists
TOOL_LIST_KEYS: frozenset[str] = frozenset({"allowed-tools", "tools"})

# =============================================================================
# Host values
# =============================================================================

PERMISSION_MODES: frozenset[str] = frozenset({
    "default",
    "acceptEdits",
    "bypassPermissions",
    "plan",
    "dontAsk",
})

MODEL_ALIASES: frozenset[str] = frozenset({
    "sonnet",
    "opus",
    "haiku",
    "inherit",
})

# Full model identifiers start with this prefix
MODEL_ID_PREFIX: str = "claude-"

# Tool name granting shell access
SHELL_TOOL: str = "Bash"

# =============================================================================
# Limits
# =============================================================================

# Documents larger than this are skipped during discovery (bytes)
MAX_DOCUMENT_BYTES: int = 1024 * 1024

# Similarity threshold for "did you mean" suggestions
SUGGESTION_THRESHOLD: float = 0.6

# Maximum slug length produced by slugify()
MAX_SLUG_LENGTH: int = 50
