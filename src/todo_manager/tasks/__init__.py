"""
Task subsystem.

Components:
- task_models.py: Task record + due-date parsing/formatting helpers
- task_codec.py: TaskCodec, reading/writing the store and export files
"""
