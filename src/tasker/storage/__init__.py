"""
Storage subsystem.

Components:
- gateway.py: JSON files for tasks and settings (atomic writes, tolerant loads)
- autosave.py: debounced single-writer queue + store/settings wiring
"""
