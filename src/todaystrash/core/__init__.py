"""Plumbing shared by every todaystrash command.

    config     layered settings (defaults, file, TRASH_* env)
    console    Rich consoles and the log handler
    daytime    local calendar-day arithmetic
    decorators friendly CLI error reporting
    registry   the command table
    result     Result values and the error hierarchy
    runtime    per-invocation context
    templates  the Jinja2 environment
"""
