"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskView, MutationResult)
- task_store.py: in-memory authoritative task list + mutations
- task_persistence.py: JSON snapshot gateway (load/save, atomic replace)
- task_api.py: small high-level helpers used by the front-end (submit, edit, toggle, delete)
"""
