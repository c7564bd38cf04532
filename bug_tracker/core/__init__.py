"""Core — pure record rules, query translation, errors and storage contracts.

Invariants:
    - No IO, no async, no imports from services/, infrastructure/ or api/
    - Sanitizer and Validator never raise; they return data
"""
