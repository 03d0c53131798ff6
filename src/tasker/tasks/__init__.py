"""
Task subsystem.

Components:
- task_models.py: the Task entity and its persisted field mapping
- task_store.py: in-memory ordered task list + mutation API + change subscription
"""
