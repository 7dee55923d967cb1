"""
Services Layer

Pure session-engine logic that:
- Accepts a PlaySession plus typed ids/enums
- Returns the next PlaySession (or a CommandResult)
- Does NOT depend on HTTP request/response objects
- Does NOT touch storage, except session_store which is the storage adapter
"""
