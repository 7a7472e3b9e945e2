"""
To-do list manager.

Components:
- tasks/: data model, in-memory TaskStore, JSON task file, console helpers
- cli/: bootstrap (composition root), slash commands, entrypoint
- connectors/: console REPL
"""
