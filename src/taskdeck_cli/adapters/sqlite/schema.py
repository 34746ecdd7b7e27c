"""Database schema definitions for the local SQLite entity store.

Timestamps are INTEGER epoch milliseconds. References between tables are
plain TEXT ids without FOREIGN KEY constraints: referential integrity is
enforced by the services (in-use guards, tag stripping, comment cascade).
"""

from __future__ import annotations

# Schema version tracking
SCHEMA_VERSION = 1

CREATE_USERS_TABLE = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE,
    name TEXT,
    created_at INTEGER NOT NULL
)
"""

CREATE_PROJECTS_TABLE = """
CREATE TABLE IF NOT EXISTS projects (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT,
    archived BOOLEAN NOT NULL DEFAULT 0,
    created_by TEXT NOT NULL,
    created_at INTEGER NOT NULL,
    updated_at INTEGER NOT NULL
)
"""

# Task states and priorities share one shape; "position" holds the model's order
CREATE_TASK_STATES_TABLE = """
CREATE TABLE IF NOT EXISTS task_states (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    color TEXT,
    position INTEGER NOT NULL,
    created_at INTEGER NOT NULL,
    updated_at INTEGER NOT NULL
)
"""

CREATE_PRIORITIES_TABLE = """
CREATE TABLE IF NOT EXISTS priorities (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    color TEXT,
    position INTEGER NOT NULL,
    created_at INTEGER NOT NULL,
    updated_at INTEGER NOT NULL
)
"""

CREATE_TAGS_TABLE = """
CREATE TABLE IF NOT EXISTS tags (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    color TEXT NOT NULL,
    created_at INTEGER NOT NULL,
    updated_at INTEGER NOT NULL
)
"""

CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    description TEXT,
    state_id TEXT NOT NULL,
    priority_id TEXT NOT NULL,
    project_id TEXT,
    creator_id TEXT NOT NULL,
    archived BOOLEAN NOT NULL DEFAULT 0,
    archived_at INTEGER,
    created_at INTEGER NOT NULL,
    updated_at INTEGER NOT NULL
)
"""

# Junction tables keep insertion order through "position"
CREATE_TASK_ASSIGNEES_TABLE = """
CREATE TABLE IF NOT EXISTS task_assignees (
    task_id TEXT NOT NULL,
    user_id TEXT NOT NULL,
    position INTEGER NOT NULL,
    PRIMARY KEY (task_id, user_id)
)
"""

CREATE_TASK_TAGS_TABLE = """
CREATE TABLE IF NOT EXISTS task_tags (
    task_id TEXT NOT NULL,
    tag_id TEXT NOT NULL,
    position INTEGER NOT NULL,
    PRIMARY KEY (task_id, tag_id)
)
"""

CREATE_TASK_UPDATES_TABLE = """
CREATE TABLE IF NOT EXISTS task_updates (
    id TEXT PRIMARY KEY,
    task_id TEXT NOT NULL,
    user_id TEXT NOT NULL,
    body TEXT NOT NULL,
    created_at INTEGER NOT NULL
)
"""

CREATE_FILTER_PRESETS_TABLE = """
CREATE TABLE IF NOT EXISTS filter_presets (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    filters TEXT NOT NULL,
    sort_keys TEXT NOT NULL,
    created_by TEXT NOT NULL,
    created_at INTEGER NOT NULL,
    updated_at INTEGER NOT NULL
)
"""

# Append-only; changes and metadata are JSON text
CREATE_AUDIT_LOGS_TABLE = """
CREATE TABLE IF NOT EXISTS audit_logs (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    action TEXT NOT NULL,
    entity_type TEXT NOT NULL,
    entity_id TEXT NOT NULL,
    changes TEXT,
    metadata TEXT,
    timestamp INTEGER NOT NULL
)
"""

ALL_TABLES = [
    CREATE_USERS_TABLE,
    CREATE_PROJECTS_TABLE,
    CREATE_TASK_STATES_TABLE,
    CREATE_PRIORITIES_TABLE,
    CREATE_TAGS_TABLE,
    CREATE_TASKS_TABLE,
    CREATE_TASK_ASSIGNEES_TABLE,
    CREATE_TASK_TAGS_TABLE,
    CREATE_TASK_UPDATES_TABLE,
    CREATE_FILTER_PRESETS_TABLE,
    CREATE_AUDIT_LOGS_TABLE,
]

ALL_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_archived_created ON tasks(archived, created_at)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_state ON tasks(state_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_priority ON tasks(priority_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_project ON tasks(project_id)",
    "CREATE INDEX IF NOT EXISTS idx_task_assignees_user ON task_assignees(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_task_tags_tag ON task_tags(tag_id)",
    "CREATE INDEX IF NOT EXISTS idx_task_states_position ON task_states(position)",
    "CREATE INDEX IF NOT EXISTS idx_priorities_position ON priorities(position)",
    "CREATE INDEX IF NOT EXISTS idx_task_updates_task ON task_updates(task_id)",
    "CREATE INDEX IF NOT EXISTS idx_audit_logs_timestamp ON audit_logs(timestamp)",
    "CREATE INDEX IF NOT EXISTS idx_audit_logs_entity ON audit_logs(entity_type, entity_id)",
]
