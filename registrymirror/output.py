"""
Output module for registrymirror.

Provides consistent output formatting across all commands:
- JSONL (default): Newline-delimited JSON for piping
- Pretty: Human-readable tables using Rich

Usage:
    from registrymirror.output import emit, emit_error

    emit(result.operations, pretty=pretty)
    emit_error("invalid registry url ...", type="invalid_registry")
"""

import json
import sys
from typing import Iterable, Any, Dict, Optional, List

from rich.console import Console
from rich.table import Table


def emit(
    items: Iterable[Any],
    pretty: bool = False,
    columns: Optional[List[str]] = None,
    title: Optional[str] = None,
) -> None:
    """
    Emit items as JSONL or pretty table.

    Args:
        items: Items to emit (should have to_dict() method or be dicts)
        pretty: If True, render as table. If False, output JSONL
        columns: Column names for table (auto-detected if None)
        title: Optional table title (pretty mode only)
    """
    if pretty:
        _emit_table(items, columns, title)
    else:
        _emit_jsonl(items, sys.stdout)


def _to_dict(item: Any) -> Dict[str, Any]:
    if hasattr(item, 'to_dict'):
        return item.to_dict()
    if isinstance(item, dict):
        return item
    return {'value': str(item)}


def _emit_jsonl(items: Iterable[Any], stream=sys.stdout) -> None:
    """Emit items as JSONL."""
    for item in items:
        print(json.dumps(_to_dict(item), ensure_ascii=False), file=stream, flush=True)


def _emit_table(items: Iterable[Any], columns: Optional[List[str]] = None,
                title: Optional[str] = None) -> None:
    """Emit items as a Rich table."""
    rows = [_to_dict(item) for item in items]

    if not rows:
        print("No results found")
        return

    # Auto-detect columns if not provided
    if not columns:
        columns = list(rows[0].keys())

    console = Console()
    table = Table(show_header=True, header_style="bold cyan", title=title)

    for col in columns:
        table.add_column(col)

    for row in rows:
        table.add_row(*[_format_value(row.get(col, '')) for col in columns])

    console.print(table)


def _format_value(value: Any) -> str:
    """Format a value for table display."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'Yes' if value else 'No'
    return str(value)


def emit_error(
    error: str,
    type: str = "error",
    context: Optional[Dict[str, Any]] = None
) -> None:
    """
    Emit error to stderr as JSON.

    Args:
        error: Error message
        type: Error type (e.g., "invalid_registry", "filesystem_error")
        context: Additional context dict
    """
    obj = {
        'error': error,
        'type': type
    }
    if context:
        obj['context'] = context

    print(json.dumps(obj, ensure_ascii=False), file=sys.stderr, flush=True)
