"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Category, Priority)
- task_store.py: in-memory store + ordering/filter/search
- task_file.py: versioned JSON persistence (TaskFileRepository)
- task_api.py: input parsing and display helpers used by the console
"""
