"""Test package for KnowledgeSearch.

Structure:
    - unit/: Individual component tests
    - integration/: Components wired together and the HTTP host

Hosted services are replaced by httpx transports; no network access needed.
"""
