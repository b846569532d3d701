"""
Interactive command-line task manager.

Components:
- tasks/: Task record and the delimited-text codec (store + export layouts)
- core/: AppState (the session's task list) and console ports
- cli/: settings -> state wiring, numbered menu actions, entry point
- connectors/: the interactive console loop
"""
