"""Terminal output.

Every command hands plain JSON-ready data to ``format_output``. ``json``,
``yaml`` and ``quiet`` write straight to stdout for scripts; ``table`` and
``pretty`` go through the shared Rich console. A dict with a ``tasks`` key
is a task page and is rendered with its "N of M" footer.
"""

import json
from datetime import UTC, datetime
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

console = Console()

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml", "quiet")

ICONS = {
    "assignee": "👤",
    "tag": "🏷️",
    "project": "📁",
    "updated": "🔄",
    "archived": "🗃️",
}


def format_timestamp(value: int | None) -> str:
    """Epoch milliseconds as ``YYYY-MM-DD HH:MM`` UTC."""
    if value is None:
        return "-"
    return datetime.fromtimestamp(value / 1000, tz=UTC).strftime("%Y-%m-%d %H:%M")


def format_output(data: Any, output_format: str = "pretty", compact: bool = False) -> None:
    """Render ``data`` in one of ``OUTPUT_FORMATS``.

    Raises:
        ValueError: unknown ``output_format``.
    """
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    elif output_format == "quiet":
        format_quiet(data)
    elif output_format in ("table", "pretty"):
        _render(data, pretty=output_format == "pretty", compact=compact)
    else:
        raise ValueError(
            f"unknown output format {output_format!r}; choose from {', '.join(OUTPUT_FORMATS)}"
        )


def _render(data: Any, pretty: bool, compact: bool) -> None:
    if not data:
        console.print("[yellow]No data to display[/yellow]")
    elif isinstance(data, dict) and "tasks" in data:
        if pretty:
            format_tasks_pretty(data, compact)
        else:
            format_dict_table([_flatten_task(task) for task in data["tasks"]])
            _print_page_footer(data)
    elif isinstance(data, dict):
        format_single_item(data)
    elif isinstance(data, list) and isinstance(data[0], dict):
        format_dict_table(data)
    elif isinstance(data, list):
        for item in data:
            console.print(item)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(map(str, value))
    if isinstance(value, dict):
        return json.dumps(value, default=str)
    return str(value)


def _heading(key: str) -> str:
    return key.replace("_", " ").title()


def format_dict_table(items: list[dict]) -> None:
    """One row per dict, columns taken from the first dict's keys."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0])
    table = Table(header_style="bold magenta")
    for column in columns:
        table.add_column(_heading(column))
    for item in items:
        table.add_row(*(_cell(item.get(column)) for column in columns))
    console.print(table)


def format_single_item(item: dict) -> None:
    table = Table(show_header=False, box=None)
    table.add_column(style="cyan")
    table.add_column()
    for key, value in item.items():
        table.add_row(_heading(key), _cell(value))
    console.print(table)


def format_quiet(data: Any) -> None:
    """Print only ids, one per line."""
    if isinstance(data, dict):
        data = data.get("tasks", [data])
    for item in data or []:
        if isinstance(item, dict) and "id" in item:
            print(item["id"])


def format_error(message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def format_info(message: str) -> None:
    console.print(f"[bold blue]Info:[/bold blue] {message}")


# Task pages


def _flatten_task(task: dict) -> dict:
    """Replace embedded relations with display names for tabular output."""
    return {
        "id": task.get("id"),
        "title": task.get("title"),
        "state": (task.get("state") or {}).get("name"),
        "priority": (task.get("priority") or {}).get("name"),
        "project": (task.get("project") or {}).get("name"),
        "assignees": [user.get("name") or user.get("email") for user in task.get("assignee_users", [])],
        "tags": [tag.get("name") for tag in task.get("tag_list", [])],
        "updated": format_timestamp(task.get("updated_at")),
    }


def _styled(entry: dict | None, fallback: str = "-") -> str:
    if not entry:
        return f"[dim]{fallback}[/dim]"
    name = escape(str(entry.get("name", fallback)))
    color = entry.get("color")
    return f"[{color}]{name}[/]" if color else name


def _print_page_footer(page: dict) -> None:
    shown = len(page.get("tasks", []))
    console.print(f"[dim]{shown} of {page.get('total_count', shown)} tasks[/dim]")


def format_tasks_pretty(page: dict, compact: bool = False) -> None:
    tasks = page.get("tasks", [])
    header = Text("📋 Tasks ", style="bold cyan")
    header.append(f"({page.get('total_count', len(tasks))} matching)", style="dim")
    console.print(header)
    console.print()

    for task in tasks:
        format_task_item(task, compact)

    if tasks:
        console.print()
    _print_page_footer(page)


def format_task_item(task: dict, compact: bool = False) -> None:
    """One task line (id, state, title, priority) and, unless compact, a meta line."""
    line = (
        f"[dim]{task.get('id', '')}[/dim] {_styled(task.get('state'))} "
        f"[bold]{escape(task.get('title', 'Untitled'))}[/bold] ({_styled(task.get('priority'))})"
    )
    if task.get("archived"):
        line += f" {ICONS['archived']}"
    console.print(Text.from_markup(line))
    if compact:
        return

    meta = []
    if task.get("project"):
        meta.append(f"{ICONS['project']} {escape(task['project'].get('name'))}")
    users = task.get("assignee_users", [])
    if users:
        names = ", ".join(user.get("name") or user.get("email") for user in users)
        meta.append(f"{ICONS['assignee']} {escape(names)}")
    meta.extend(f"{ICONS['tag']} {_styled(tag)}" for tag in task.get("tag_list", []))
    meta.append(f"{ICONS['updated']} {format_timestamp(task.get('updated_at'))}")
    console.print(Text.from_markup("    " + "  ".join(meta)))
