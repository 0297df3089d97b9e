"""
litequery core package.

This package currently provides:
- Fluent SQL statement builders (`litequery.database.querybuilders`)
- A SQLite connection manager with saved, prepared queries
  (`litequery.database`)
- A minimal Typer-based CLI (`litequery.cli`)

Configuration:
- Shared, project-wide constants live in `litequery.global_config`.
"""
