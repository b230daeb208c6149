"""Unit tests for individual components in isolation.

Coverage:
    - config: Environment loading and validation
    - agent: Request shape and result normalization
    - ingestion: Upload state machine
    - conversation, documents, notifications: Session state
    - assistant: Question orchestration
"""
